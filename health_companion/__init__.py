"""Health Companion: Alexa skill backend answering symptom questions via OpenAI."""

HEALTH_COMPANION_VERSION = "0.1.0"

__all__ = ["HEALTH_COMPANION_VERSION"]
