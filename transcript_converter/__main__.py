"""Package entry point for ``python -m transcript_converter``.

WHY: Users run the converter as ``python -m transcript_converter -i in.json``
without installing the console script.

HOW: Delegates to the CLI's main() function.
"""

from transcript_converter.cli import main

if __name__ == "__main__":
    main()
