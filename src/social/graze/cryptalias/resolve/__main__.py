from typing import List
import argparse
import asyncio
import logging
import sys

from social.graze.cryptalias.app.cli import configure_logging, configure_sentry
from social.graze.cryptalias.app.config import Settings
from social.graze.cryptalias.resolve.address import CryptaliasResolver

logger = logging.getLogger(__name__)


async def realMain() -> int:
    parser = argparse.ArgumentParser(
        prog="cryptalias-resolve", description="Resolve aliases to addresses"
    )
    parser.add_argument("ticker", help="The ticker of the asset, e.g. btc.")
    parser.add_argument("alias", nargs="+", help="The alias(es) to resolve.")

    args = vars(parser.parse_args())

    ticker: str = args.get("ticker", "")
    aliases: List[str] = args.get("alias", [])

    settings = Settings()
    configure_sentry(settings)

    failed = 0
    async with settings.client_session() as session:
        resolver = CryptaliasResolver(session, settings)
        for alias in aliases:
            result = await resolver.resolve_address(ticker, alias)
            if result.ok:
                print(f"{alias} -> {result.address}")
            else:
                failed += 1
                print(f"{alias} -> {result.error.code}: {result.error.message}")
    return 1 if failed > 0 else 0


def main() -> None:
    configure_logging()
    sys.exit(asyncio.run(realMain()))


if __name__ == "__main__":
    main()
