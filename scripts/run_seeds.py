"""Run seeds from the command line.

Usage:
    cd /path/to/blog-api
    python -m scripts.run_seeds
"""
import asyncio

from blog_api.core.middleware import configure_logging
from seeds.seed_data import seed_all


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed_all())
