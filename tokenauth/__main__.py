"""Allow running the API with ``python -m tokenauth``."""

from tokenauth.main import main

if __name__ == "__main__":
    main()
