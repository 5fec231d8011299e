"""Allow ``python -m gemini_search``."""

from gemini_search.cli import main

if __name__ == "__main__":
    main()
