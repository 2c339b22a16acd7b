#!/usr/bin/env python3
"""
NHL Bot using the meshcore-cli and meshcore.py packages
Commands are plugins under nhlbot/commands
"""

import argparse
import asyncio
import signal
import sys

from nhlbot.core import NHLBot


def main():
    parser = argparse.ArgumentParser(description="NHL stats bot for MeshCore")
    parser.add_argument('--config', default='config.ini', help="Path to config file (created when missing)")
    args = parser.parse_args()

    bot = NHLBot(args.config)

    def signal_handler(sig, frame):
        print("\nShutting down...")
        bot.connected = False

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        asyncio.run(bot.start())
    except KeyboardInterrupt:
        print("\nShutting down...")
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
