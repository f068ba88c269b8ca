from .merge_pipeline import open_input, run_merge

__all__ = ["open_input", "run_merge"]
