from .generator import FlagSet, format_flags, generate_flags, load_flags, render_flags

__all__ = ["FlagSet", "format_flags", "generate_flags", "load_flags", "render_flags"]
