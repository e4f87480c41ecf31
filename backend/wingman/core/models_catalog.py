from wingman.models.system import ModelOption

DEFAULT_MODELS: list[ModelOption] = [
    ModelOption(id="mistralai/mistral-small-3.2-24b-instruct:free", name="Mistral Small 3.2 24B (Free)", provider="Mistral AI", is_free=True),
    ModelOption(id="moonshotai/kimi-dev-72b:free", name="Kimi Dev 72B (Free)", provider="Moonshot AI", is_free=True),
    ModelOption(id="deepseek/deepseek-r1:free", name="DeepSeek R1 (Free)", provider="DeepSeek", is_free=True),
    ModelOption(id="qwen/qwen3-32b:free", name="Qwen 3 32B (Free)", provider="Qwen", is_free=True),
    ModelOption(id="google/gemini-2.5-pro-exp-03-25", name="Gemini 2.5 Pro (Free)", provider="Google", is_free=True),
    ModelOption(id="google/gemini-1.5-flash:free", name="Gemini 1.5 Flash (Free)", provider="Google", is_free=True),
]

PAID_MODELS: list[ModelOption] = [
    ModelOption(id="openai/gpt-4o", name="GPT-4o (Paid)", provider="OpenAI", is_free=False),
    ModelOption(id="anthropic/claude-3-5-sonnet", name="Claude 3.5 Sonnet (Paid)", provider="Anthropic", is_free=False),
    ModelOption(id="openai/gpt-4o-mini", name="GPT-4o Mini (Paid)", provider="OpenAI", is_free=False),
    ModelOption(id="anthropic/claude-3-5-haiku", name="Claude 3.5 Haiku (Paid)", provider="Anthropic", is_free=False),
    ModelOption(id="google/gemini-1.5-pro", name="Gemini 1.5 Pro (Paid)", provider="Google", is_free=False),
    ModelOption(id="meta-llama/llama-3.1-70b-instruct", name="Llama 3.1 70B Instruct (Paid)", provider="Meta", is_free=False),
    ModelOption(id="openai/gpt-4-turbo", name="GPT-4 Turbo (Paid)", provider="OpenAI", is_free=False),
    ModelOption(id="anthropic/claude-3-opus", name="Claude 3 Opus (Paid)", provider="Anthropic", is_free=False),
    ModelOption(id="google/gemini-1.5-flash", name="Gemini 1.5 Flash (Paid)", provider="Google", is_free=False),
    ModelOption(id="meta-llama/llama-3.1-405b-instruct", name="Llama 3.1 405B Instruct (Paid)", provider="Meta", is_free=False),
]
