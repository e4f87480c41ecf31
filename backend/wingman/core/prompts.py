from wingman.core.personalities import Personality
from wingman.models.chat import ConversationMessage

NO_CONTEXT = "No additional context provided"
NO_HISTORY = "No previous conversation"


def format_transcript(history: list[ConversationMessage], other_label: str) -> str:
    """Render history as 'You: ...' / '<other_label>: ...' lines."""
    if not history:
        return NO_HISTORY
    return "\n".join(
        f"{'You' if m.role == 'user' else other_label}: {m.content}" for m in history
    )


def build_coach_prompt(
    personality: Personality,
    message: str,
    history: list[ConversationMessage],
    context: str | None = None,
) -> str:
    return (
        "You are a dating coach. I'll tell you about the girl, analyze and guide me on it.\n"
        "\n"
        f"Personality: {personality.name}\n"
        f"{personality.system_prompt}\n"
        "\n"
        "IMPORTANT:\n"
        "- Give practical, actionable advice\n"
        "- Be direct and honest\n"
        "- Analyze the situation clearly\n"
        "- Provide specific guidance\n"
        f"- Stay true to the {personality.name} approach\n"
        "- Remember our previous conversation and build on it\n"
        "\n"
        f"Context: {context or NO_CONTEXT}\n"
        "\n"
        "Previous conversation:\n"
        f"{format_transcript(history, 'Coach')}\n"
        "\n"
        f'My question: "{message}"\n'
        "\n"
        "Analyze and guide me:"
    )


def build_reply_prompt(
    personality: Personality,
    message: str,
    history: list[ConversationMessage],
    context: str | None = None,
) -> str:
    return (
        "You are a reply generator. I'll tell you her texts, generate a suitable, "
        "brief reply to her texts so she stays interested in me.\n"
        "\n"
        f"Personality: {personality.name}\n"
        f"{personality.system_prompt}\n"
        "\n"
        "IMPORTANT:\n"
        "- Keep replies brief and natural (1-2 sentences max)\n"
        "- Be confident, not desperate\n"
        "- Match her energy level\n"
        f"- Stay true to the {personality.name} personality\n"
        "- Don't be overly eager or pushy\n"
        "- Remember the conversation context and build on previous messages\n"
        "\n"
        f"Context: {context or NO_CONTEXT}\n"
        "\n"
        "Previous conversation:\n"
        f"{format_transcript(history, 'Her')}\n"
        "\n"
        f'Her message: "{message}"\n'
        "\n"
        "Generate a brief, confident reply:"
    )


def build_messages(
    system_prompt: str,
    history: list[ConversationMessage],
    message: str,
) -> list[dict]:
    """Upstream chat payload: system prompt, prior turns, then the new user message."""
    return [
        {"role": "system", "content": system_prompt},
        *(m.model_dump() for m in history),
        {"role": "user", "content": message},
    ]
