"""Allow ``python -m flowbench``."""

from flowbench.cli import main

if __name__ == "__main__":
    main()
