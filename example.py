"""Example workflow running the bundled expression demos."""

import sys

from cgpexpr import example_expression_tour, example_gradient_of_loss


def main() -> int:
    example_expression_tour()
    print()
    try:
        example_gradient_of_loss()
    except ModuleNotFoundError as exc:
        print(f"Skipping gradient demo: {exc}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
