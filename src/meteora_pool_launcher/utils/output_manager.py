import json
from pathlib import Path
from time import time

from meteora_pool_launcher.auto_config.environment import config

OUTPUT_ROOT = Path(__file__).resolve().parent.parent.parent.parent / "data"

class OutputManager:
    """Centralized output management for all project files."""

    def __init__(self, output_root=None):
        self.output_root = Path(output_root) if output_root else (config.output_dir or OUTPUT_ROOT)

    def save_output(self, data, subpath, name=None):
        """
        Save data as JSON to output_root/subpath/name, auto-generating name if not set.
        Pydantic models are dumped in JSON mode first.
        Returns the full path to the saved file.
        """
        full_dir = self.output_root / subpath
        full_dir.mkdir(parents=True, exist_ok=True)

        if hasattr(data, "model_dump"):
            data = data.model_dump(mode="json")

        if name is None:
            name = f"output_{int(time())}.json"
        if not name.endswith('.json'):
            name += '.json'

        path = full_dir / name
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)
        return str(path)

output_manager = OutputManager()

def save_output(data, subpath, name=None):
    """
    Convenience function to save data using the global output_manager.
    """
    return output_manager.save_output(data, subpath, name=name)
