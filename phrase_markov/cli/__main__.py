import sys

from phrase_markov.cli import main

if __name__ == "__main__":
    sys.exit(main())
