import argparse
import asyncio
import json
import logging
import sys
from typing import Optional
from jwcrypto import jwk
from ulid import ULID

from social.graze.cryptalias.app.cli import configure_logging
from social.graze.cryptalias.crypto.envelope import sign_payload
from social.graze.cryptalias.resolve.address import verify_signed_payload
from social.graze.cryptalias.resolve.payload import build_payload, validate_payload
from social.graze.cryptalias.errors import CryptaliasError

logger = logging.getLogger(__name__)


def load_jwk(path: str) -> jwk.JWK:
    with open(path) as fd:
        return jwk.JWK.from_json(fd.read())


async def genJwk() -> None:
    key = jwk.JWK.generate(kty="OKP", crv="Ed25519", kid=str(ULID()))
    print(key.export(private_key=True))


async def publicJwk(key_file: str) -> None:
    key = load_jwk(key_file)
    print(key.export_public())


async def signEnvelope(
    key_file: str, address: str, ttl: int, ticker: Optional[str] = None
) -> None:
    key = load_jwk(key_file)
    extra = {"ticker": ticker} if ticker else {}
    payload = build_payload(address, expires_in_seconds=ttl, **extra)
    print(sign_payload(payload, key, kid=key.key_id))


async def verifyEnvelope(envelope: str, key_document: str) -> int:
    result = verify_signed_payload(envelope, key_document)
    if not result.ok:
        print(f"{result.error.code}: {result.error.message}")
        return 1
    try:
        payload = validate_payload(result.payload)
    except CryptaliasError as e:
        print(f"{e.code}: {e.message}")
        return 1
    print(json.dumps(payload.model_dump(mode="json", exclude_none=True)))
    return 0


async def realMain() -> int:
    parser = argparse.ArgumentParser(
        prog="cryptalias-util", description="Cryptalias utilities"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    _ = subparsers.add_parser("gen-jwk", help="Generate an Ed25519 signing JWK")

    public_jwk = subparsers.add_parser(
        "public-jwk", help="Print the public half of a JWK"
    )
    public_jwk.add_argument("key_file", help="Path to the private JWK.")

    sign = subparsers.add_parser("sign", help="Sign a resolution payload")
    sign.add_argument("key_file", help="Path to the private JWK.")
    sign.add_argument("address", help="The address to sign.")
    sign.add_argument(
        "--ttl", type=int, default=60, help="Seconds until the payload expires."
    )
    sign.add_argument("--ticker", default=None, help="Ticker to include.")

    verify = subparsers.add_parser(
        "verify", help="Verify an envelope against a key document"
    )
    verify.add_argument("envelope", help="The compact envelope.")
    verify.add_argument("key_document", help="The public key document as JSON.")

    args = vars(parser.parse_args())
    command = args.get("command", None)

    if command == "gen-jwk":
        await genJwk()
    elif command == "public-jwk":
        await publicJwk(args["key_file"])
    elif command == "sign":
        await signEnvelope(
            args["key_file"], args["address"], args["ttl"], args.get("ticker")
        )
    elif command == "verify":
        return await verifyEnvelope(args["envelope"], args["key_document"])
    return 0


def main() -> None:
    configure_logging()
    sys.exit(asyncio.run(realMain()))


if __name__ == "__main__":
    main()
