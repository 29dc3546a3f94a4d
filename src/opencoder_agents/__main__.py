"""Allow ``python -m opencoder_agents``."""

from opencoder_agents.cli import main

if __name__ == "__main__":
    main()
