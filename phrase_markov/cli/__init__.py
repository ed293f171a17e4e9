# phrase_markov/cli - argparse + Rich front end

from .cli import CLI, build_parser, main

__all__ = ["CLI", "build_parser", "main"]
