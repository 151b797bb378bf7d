#!/usr/bin/env python3
"""Script to send a test SMS through the Kyivstar sandbox and check its status.

Usage:
    python scripts/send_test_sms.py +380501234567

The script reads KYIVSTAR_CLIENT_ID and KYIVSTAR_CLIENT_SECRET from the
environment or a .env file. The sandbox is always used.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kyivstar_adwisor.client import KyivstarClient
from kyivstar_adwisor.config import get_settings
from kyivstar_adwisor.errors import KyivstarError
from kyivstar_adwisor.models import SendResult, StatusResult


async def send_test_sms(sender: str, to: str, text: str, wait: float) -> bool:
    """Send an SMS and check its delivery status.

    Returns:
        True if both calls succeeded, False otherwise
    """
    try:
        settings = get_settings()
    except Exception as e:
        print(f"Failed to load configuration: {e}")
        print("\nSet the following variables in the environment or .env:")
        print("  - KYIVSTAR_CLIENT_ID")
        print("  - KYIVSTAR_CLIENT_SECRET")
        return False

    client = KyivstarClient(settings.client_id, settings.client_secret, use_sandbox=True)

    try:
        sent = SendResult.model_validate(await client.send_sms(sender, to, text))
        print(f"SMS send: {sent.model_dump(by_alias=True)}")

        await asyncio.sleep(wait)

        status = StatusResult.model_validate(await client.check_sms(sent.msg_id))
        print(f"SMS check: {status.model_dump(by_alias=True)}")
        return True

    except KyivstarError as e:
        print(f"Error with code [{e.code}]: {e.message}")
        return False


def main():
    """Entry point."""
    parser = argparse.ArgumentParser(description="Send a test SMS via the Kyivstar sandbox")
    parser.add_argument("to", help="Recipient phone number, e.g. +380501234567")
    parser.add_argument("--sender", default="messagedesk", help="Alpha name to send from")
    parser.add_argument("--text", default="Test message from kyivstar-adwisor")
    parser.add_argument("--wait", type=float, default=5.0, help="Seconds before status check")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    success = asyncio.run(send_test_sms(args.sender, args.to, args.text, args.wait))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
