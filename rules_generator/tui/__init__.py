from rules_generator.tui.renderers import GeneratorConsoleUI

__all__ = ["GeneratorConsoleUI"]
