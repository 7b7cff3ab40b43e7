"""Domain constants and conversation copy.

Centralizes questionnaire wording, result and escalation messages, and the
keyword tables used for routing free-text messages.
"""

from __future__ import annotations

from mindcare.domain.enums import QuestionnaireKind, RiskTier

GREETING = (
    "Hello! I'm your mental health support assistant. I'm here to provide you with "
    "coping strategies, mindfulness techniques, and emotional support. "
    "How are you feeling today?"
)

# Only the first five items of each instrument are asked, while tiers use the
# full-instrument cut-offs and results display the full-instrument maximum.
QUESTIONS: dict[QuestionnaireKind, tuple[str, ...]] = {
    QuestionnaireKind.PHQ9: (
        "Over the last 2 weeks, how often have you been bothered by little interest "
        "or pleasure in doing things?",
        "Over the last 2 weeks, how often have you felt down, depressed, or hopeless?",
        "Over the last 2 weeks, how often have you had trouble falling or staying asleep, "
        "or sleeping too much?",
        "Over the last 2 weeks, how often have you felt tired or had little energy?",
        "Over the last 2 weeks, how often have you had poor appetite or been overeating?",
    ),
    QuestionnaireKind.GAD7: (
        "Over the last 2 weeks, how often have you been bothered by feeling nervous, "
        "anxious, or on edge?",
        "Over the last 2 weeks, how often have you not been able to stop or control worrying?",
        "Over the last 2 weeks, how often have you been worrying too much about "
        "different things?",
        "Over the last 2 weeks, how often have you had trouble relaxing?",
        "Over the last 2 weeks, how often have you been so restless that it's hard to sit still?",
    ),
}

CANONICAL_MAX_SCORES: dict[QuestionnaireKind, int] = {
    QuestionnaireKind.PHQ9: 27,
    QuestionnaireKind.GAD7: 21,
}

RESULT_MESSAGES: dict[QuestionnaireKind, dict[RiskTier, str]] = {
    QuestionnaireKind.PHQ9: {
        RiskTier.LOW: (
            "Your PHQ-9 score indicates minimal depression symptoms. That's great! Continue "
            "with healthy habits like regular sleep, exercise, and social connections."
        ),
        RiskTier.MEDIUM: (
            "Your PHQ-9 score indicates mild depression symptoms. Consider speaking with a "
            "counselor and practicing self-care strategies I can teach you."
        ),
        RiskTier.HIGH: (
            "Your PHQ-9 score indicates moderate depression symptoms. I strongly recommend "
            "scheduling an appointment with a mental health professional. Would you like me "
            "to help you find resources?"
        ),
        RiskTier.CRITICAL: (
            "Your PHQ-9 score indicates severe depression symptoms. Please seek immediate "
            "professional help. I can connect you with emergency resources if needed."
        ),
    },
    QuestionnaireKind.GAD7: {
        RiskTier.LOW: (
            "Your GAD-7 score indicates minimal anxiety symptoms. Keep practicing relaxation "
            "techniques and maintaining healthy coping strategies."
        ),
        RiskTier.MEDIUM: (
            "Your GAD-7 score indicates mild anxiety symptoms. Let's work on some anxiety "
            "management techniques together."
        ),
        RiskTier.HIGH: (
            "Your GAD-7 score indicates moderate anxiety symptoms. I recommend speaking with "
            "a counselor about these feelings."
        ),
        RiskTier.CRITICAL: (
            "Your GAD-7 score indicates severe anxiety symptoms. Please consider seeking "
            "immediate professional support."
        ),
    },
}

ESCALATION_MESSAGES: dict[RiskTier, str] = {
    RiskTier.HIGH: (
        "📞 I recommend booking an appointment with one of our counselors. "
        "Would you like me to help you schedule a confidential session?"
    ),
    RiskTier.CRITICAL: (
        "🚨 URGENT: If you're having thoughts of self-harm, please contact emergency "
        "services immediately at 911 or go to your nearest emergency room. You can also "
        "reach the 988 Suicide & Crisis Lifeline by calling or texting 988."
    ),
}

# Substring triggers (matched case-insensitively) that start an assessment.
ASSESSMENT_TRIGGERS: dict[QuestionnaireKind, tuple[str, ...]] = {
    QuestionnaireKind.PHQ9: ("phq", "depression assessment"),
    QuestionnaireKind.GAD7: ("gad", "anxiety assessment"),
}

# Keyword tables for the local responder, checked in insertion order.
TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "anxiety": ("anxious", "anxiety", "worried", "panic", "nervous", "fear"),
    "depression": ("depressed", "sad", "hopeless", "worthless", "empty", "down"),
    "stress": ("stressed", "overwhelmed", "pressure", "tension", "burnt out"),
}

CANNED_RESPONSES: dict[str, tuple[str, ...]] = {
    "anxiety": (
        "I understand you're feeling anxious. Let's try a simple breathing exercise: "
        "Breathe in for 4 counts, hold for 4, exhale for 6. Repeat this 3 times.",
        "Anxiety can feel overwhelming, but you're not alone. Would you like me to guide "
        "you through a grounding technique called 5-4-3-2-1?",
        "Thank you for sharing how you feel. Here's a quick mindfulness tip: Name 5 things "
        "you can see, 4 you can touch, 3 you can hear, 2 you can smell, and 1 you can taste.",
    ),
    "depression": (
        "I hear that you're struggling right now. Your feelings are valid, and it's brave "
        "of you to reach out. Would you like to try a brief mood-boosting activity?",
        "Depression can make everything feel difficult. Let's start small - can you think "
        "of one tiny thing that brought you even a moment of comfort today?",
        "You've taken an important step by talking about this. Sometimes when we're feeling "
        "low, gentle movement can help. Would you like some simple stretching suggestions?",
    ),
    "stress": (
        "Stress is your body's natural response, but we can learn to manage it better. "
        "Let's try the STOP technique: Stop, Take a breath, Observe your thoughts, "
        "Proceed mindfully.",
        "I can sense you're feeling overwhelmed. Here's a quick stress relief technique: "
        "Progressive muscle relaxation. Start by tensing your shoulders for 5 seconds, "
        "then release.",
        "Stress affects us all. Would you like me to suggest some time management "
        "techniques or would you prefer a guided meditation script?",
    ),
    "general": (
        "Thank you for trusting me with your feelings. Remember, seeking help is a sign "
        "of strength, not weakness.",
        "I'm here to support you through this conversation. Would you like to tell me more "
        "about what's been on your mind lately?",
        "Your mental health matters, and you deserve support. Is there a particular area "
        "of your wellbeing you'd like to focus on today?",
    ),
}

PROXY_ERROR_REPLY = "Error contacting mental health model."
