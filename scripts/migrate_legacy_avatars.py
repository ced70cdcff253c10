#!/usr/bin/env python
"""Convert the legacy customavatars/allowedavatars config maps into avatars.json."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from avatarbot.config import load_settings  # noqa: E402
from avatarbot.persistence import (  # noqa: E402
    AvatarFileGateway,
    legacy_user_ids,
    load_legacy_config,
)

logger = logging.getLogger("migrate_legacy_avatars")


def parse_args() -> argparse.Namespace:
    load_dotenv()
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description="Fold the legacy per-user and per-avatar config maps into the avatar record.",
    )
    parser.add_argument(
        "--legacy-config",
        type=Path,
        default=settings.legacy_config,
        help="YAML/JSON config holding 'customavatars' and 'allowedavatars' (default: AVATARBOT_LEGACY_CONFIG).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=settings.avatars_file,
        help="Avatar record to create (default: AVATARBOT_AVATARS_FILE or config/avatars.json).",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Replace an existing avatar record instead of refusing.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report which users would be migrated without writing anything.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.legacy_config is None:
        raise SystemExit("No legacy config given. Pass --legacy-config or set AVATARBOT_LEGACY_CONFIG.")
    if not args.legacy_config.exists():
        raise SystemExit(f"Legacy config {args.legacy_config} not found.")

    config = load_legacy_config(args.legacy_config)
    user_ids = legacy_user_ids(config)
    if args.dry_run:
        logger.info("Dry run: %d users would be migrated: %s", len(user_ids), ", ".join(user_ids) or "none")
        return

    if args.output.exists():
        if not args.force:
            raise SystemExit(f"{args.output} already exists. Use --force to replace it.")
        backup = args.output.with_suffix(args.output.suffix + ".bak")
        backup.write_text(args.output.read_text(encoding="utf-8"), encoding="utf-8")
        args.output.unlink()
        logger.info("Backed up existing record to %s", backup)

    gateway = AvatarFileGateway(args.output, save_delay=0, legacy_config=config)
    store, report = gateway.load()
    logger.info("Wrote %s with %d entries.", args.output, report.migrated_users)
    logger.info(json.dumps(store.to_payload(), indent=2, sort_keys=True))
    logger.info("Remove 'customavatars' and 'allowedavatars' from %s once you have checked the result.", args.legacy_config)


if __name__ == "__main__":
    main()
