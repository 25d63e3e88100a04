from pathlib import Path
from typing import Optional

DETECTION_PROMPT = "ai_detection"


class PromptManager:
    def __init__(self, prompts_dir: Optional[Path] = None):
        self.search_paths = [
            Path(__file__).parent.parent / "prompts",   # realcheck/prompts
            Path.cwd() / "prompts"                      # project_root/prompts (optional)
        ]
        # An explicitly configured directory wins over the packaged prompts
        if prompts_dir is not None:
            self.search_paths.insert(0, Path(prompts_dir))

    def load_prompt(self, name: str) -> str:
        filename = f"{name}.txt"

        for base in self.search_paths:
            file_path = base / filename
            if file_path.exists():
                return file_path.read_text(encoding="utf-8").strip()

        raise FileNotFoundError(
            f"Prompt file '{filename}' not found in paths: "
            f"{[str(p) for p in self.search_paths]}"
        )
