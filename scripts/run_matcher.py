# scripts/run_matcher.py
from tech_matcher.main import cli


if __name__ == "__main__":
    cli()
