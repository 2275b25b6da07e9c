"""Protean Engine runner for the marketplace domain.

Starts Engine workers that process events asynchronously when the
production overlay is active:
- OutboxProcessor: polls outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes event handlers

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import argparse

from protean.server.engine import Engine


def main():
    parser = argparse.ArgumentParser(description="Marketplace Engine runner")
    parser.add_argument("--debug", action="store_true", help="Log every message the engine handles")
    parser.add_argument("--test-mode", action="store_true", help="Process pending messages once and exit")
    args = parser.parse_args()

    from marketplace.domain import marketplace

    marketplace.init()
    engine = Engine(marketplace, test_mode=args.test_mode, debug=args.debug)
    engine.run()


if __name__ == "__main__":
    main()
