import argparse
import asyncio
import logging
import sys

from find_best_keyword.core.config import load_config
from find_best_keyword.core.errors import KeywordJobError
from find_best_keyword.services.keyword_client import FindBestKeywordClient


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find the best keyword for a prompt."
    )
    parser.add_argument("prompt", help="Prompt to submit")
    parser.add_argument("--interval", type=int, help="Poll interval in ms")
    parser.add_argument("--timeout", type=int, help="Poll timeout in ms")
    parser.add_argument("--base-url", help="Override the service base URL")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = load_config()

    logging.basicConfig(
        level=logging.DEBUG if (args.debug or cfg.debug) else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.base_url:
        cfg = cfg.model_copy(update={"base_url": args.base_url.rstrip("/")})

    client = FindBestKeywordClient.from_config(cfg)
    try:
        result = await client.run(
            args.prompt,
            interval_ms=args.interval if args.interval is not None else cfg.poll_interval_ms,
            timeout_ms=args.timeout if args.timeout is not None else cfg.poll_timeout_ms,
        )
    except KeywordJobError as e:
        logging.error(f"Keyword job failed ({e.kind.value}): {e}")
        return 1

    print(result if result is not None else "")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
