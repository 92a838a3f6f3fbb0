from pathlib import Path
from string import Template

PROMPTS_DIR = Path(__file__).parent.parent / "llm" / "prompts"


def load_prompt(name: str) -> Template:
    path = PROMPTS_DIR / f"{name}.txt"
    return Template(path.read_text(encoding="utf-8"))
