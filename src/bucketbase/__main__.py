"""Entry point for 'python -m bucketbase'."""

from bucketbase.cli import main

if __name__ == "__main__":
    main()
