"""
InscriptionMarket_v1 Deployment
Entry point: python deploy.py --network localhost
"""

import sys
import argparse
from typing import List, Optional
from loguru import logger
from dotenv import load_dotenv

from blockchain import Web3DeploymentFacility
from deployer import DeploymentRunner

load_dotenv()

LOG_FILE = "data/logs/deploy.log"


def configure_logging(level: str = "INFO", log_file: Optional[str] = LOG_FILE):
    """Send logs to stderr (and a rotating file)"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Deploy InscriptionMarket_v1")
    parser.add_argument("--network", default=None,
                        help="Network name from config/networks.json (default: DEPLOY_NETWORK)")
    parser.add_argument("--artifacts", default="artifacts", help="Hardhat artifacts directory")
    parser.add_argument("--config", default=None, help="Networks config JSON")
    parser.add_argument("--log-level", default="INFO", help="Console log level")
    parser.add_argument("--no-log-file", action="store_true", help=f"Do not write {LOG_FILE}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    configure_logging(args.log_level, None if args.no_log_file else LOG_FILE)

    try:
        facility = Web3DeploymentFacility.from_network(
            network_name=args.network,
            config_path=args.config,
            artifacts_dir=args.artifacts
        )
    except Exception as e:
        logger.error(f"Invalid deployment configuration: {e}")
        return 1

    return DeploymentRunner(facility).run()


if __name__ == "__main__":
    sys.exit(main())
