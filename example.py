"""Example workflow: evolve a to/too rule on a small built-in corpus."""

import sys

from rulevolve import example_to_too_discovery


def main():
    generations = int(sys.argv[1]) if len(sys.argv) > 1 else 20
    best = example_to_too_discovery(generations=generations)
    print("\nJSON:")
    print(best.to_json())


if __name__ == "__main__":
    main()
