"""
AI prompt templates for health recommendations and the chat assistant.

Prompts follow medical ethics guidelines:
- Patient-friendly, empathetic language
- Recommend professional consultation for anything beyond general advice
"""

from typing import Optional

# =============================================================================
# CHAT ASSISTANT
# =============================================================================

CHAT_SYSTEM_INSTRUCTION = (
    "You are a helpful healthcare assistant. Provide clear, accurate, and "
    "empathetic responses to health-related questions. Keep responses concise "
    "and easy to understand. If a question is outside your medical knowledge, "
    "suggest consulting a healthcare professional."
)

CHAT_WELCOME_MESSAGE = "Welcome to Healthcare Assistant! How can I help you today?"


# =============================================================================
# HEALTH RECOMMENDATIONS
# =============================================================================

HEALTH_RECOMMENDATION_PROMPT = """You are a professional healthcare advisor AI. Based on the following diagnosis, provide comprehensive, actionable, and patient-friendly health recommendations.

**Diagnosis:** {prediction}
**Confidence Level:** {confidence}

Please provide recommendations in the following structured format:

## Overview
[Brief explanation of the condition in simple terms]

## Lifestyle Recommendations
- [List specific lifestyle changes]
- [Include diet, exercise, sleep habits]
- [Daily routine adjustments]

## Dietary Guidelines
- [Foods to include]
- [Foods to avoid]
- [Meal timing and portion suggestions]

## Medical Care
- [When to consult a doctor]
- [Regular check-ups needed]
- [Medications or treatments to discuss with healthcare provider]

## Warning Signs
- [Symptoms that require immediate medical attention]
- [When to go to emergency room]

## Self-Monitoring
- [What to track daily/weekly]
- [Tools or apps that can help]
- [Target ranges for measurements]

## Additional Resources
- [Support groups or communities]
- [Reliable information sources]

Please provide practical, evidence-based advice that a patient can easily understand and implement. Be empathetic, clear, and encouraging in your tone."""


def format_confidence(confidence: Optional[float]) -> str:
    """Render a 0-1 confidence as a percentage, e.g. 0.8734 -> '87.34%'."""
    try:
        value = float(confidence)
    except (TypeError, ValueError):
        return "Not specified"
    if not value:
        return "Not specified"
    return f"{value * 100:.2f}%"


def build_health_recommendation_prompt(
    prediction: str, confidence: Optional[float] = None
) -> str:
    """Fill the recommendation prompt for one diagnosis."""
    return HEALTH_RECOMMENDATION_PROMPT.format(
        prediction=prediction, confidence=format_confidence(confidence)
    )
