#!/usr/bin/env python3
"""
RQ Worker for notification tasks.

Processes jobs queued by TaskDispatcher.

Usage:
    python -m notification.worker
    python -m notification.worker --burst
    python -m notification.worker --verbose
"""

import sys
import argparse
import logging
from typing import List, Optional

from redis import Redis
from rq import Worker

from core.config_loader import get_config

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def start_worker(burst: bool = False, queues: Optional[List[str]] = None):
    """Start the RQ worker."""
    config = get_config()
    redis_url = config.redis.url

    if queues is None:
        queues = [config.notifications.queue_name]

    logger.info("Starting RQ Worker")
    logger.info(f"Queues: {', '.join(queues)}")
    logger.info(f"Burst mode: {burst}")

    try:
        redis_conn = Redis.from_url(redis_url, password=config.redis.password)
        redis_conn.ping()
        logger.info("Connected to Redis")

        worker = Worker(queues, connection=redis_conn)

        if burst:
            logger.info("Running in burst mode...")
            worker.work(burst=True)
        else:
            logger.info("Worker started. Press Ctrl+C to stop.")
            worker.work()

    except KeyboardInterrupt:
        logger.info("Worker stopped")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description='ATS Notification Worker')
    parser.add_argument('--burst', action='store_true', help='Process all and exit')
    parser.add_argument('--queues', nargs='+', default=None)
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    start_worker(burst=args.burst, queues=args.queues)


if __name__ == '__main__':
    main()
