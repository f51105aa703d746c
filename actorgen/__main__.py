"""Entry point: python -m actorgen <openapi-file> <output-dir>"""

from actorgen.cli import main

if __name__ == "__main__":
    main()
