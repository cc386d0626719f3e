"""Error chains with context, cause iteration, backtraces and descriptive condition checks."""

__version__ = "0.1.0"
__all__ = ["backtrace", "chain", "context", "render", "partition", "ensure"]