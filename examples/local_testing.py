"""
Verify a license key against a local LicenseGate server.

Usage:
    # Install the package
    pip install -e .

    # Verify a key (debug output on)
    python examples/local_testing.py test123

    # With scope and metadata
    python examples/local_testing.py test123 --scope pro --metadata "build 42"

Environment variables:
    LICENSEGATE_USER_ID - Account user ID (default: d32af1)
    LICENSEGATE_SERVER - Server URL (default: http://localhost:8080)
    LICENSEGATE_PUBLIC_KEY - RSA public key; enables challenges when set
    LICENSEGATE_CHALLENGE_STRATEGY - "timestamp" (default) or "random"
"""

import argparse
import logging
import os
import sys

from licensegate import LicenseGate, LicenseGateConfig

USER_ID = os.getenv("LICENSEGATE_USER_ID", "d32af1")
SERVER = os.getenv("LICENSEGATE_SERVER", "http://localhost:8080")
PUBLIC_KEY = os.getenv("LICENSEGATE_PUBLIC_KEY") or None
CHALLENGE_STRATEGY = os.getenv("LICENSEGATE_CHALLENGE_STRATEGY", "timestamp")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("license_key")
    parser.add_argument("--scope")
    parser.add_argument("--metadata")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = LicenseGateConfig(
        USER_ID,
        public_key=PUBLIC_KEY,
        challenge_strategy=CHALLENGE_STRATEGY,
    ).with_validation_server(SERVER).with_debug()

    gate = LicenseGate(config=config)
    result = gate.verify_detailed(args.license_key, scope=args.scope, metadata=args.metadata)

    print(result.outcome.value)
    return 0 if result.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
