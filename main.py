import argparse
import json
import logging
import sys

from core.app_context import AppContext
from core.config_loader import load_config
from core.matching.errors import MatchingError
from core.matching.interfaces import ServiceArea
from database import database
from database.init_db import init_db
from database.uow import matching_uow

logger = logging.getLogger(__name__)


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def cmd_init_db(context: AppContext, args) -> int:
    init_db()
    return 0


def cmd_rank(context: AppContext, args) -> int:
    area = ServiceArea(city=args.city) if args.city else None
    with matching_uow() as repo:
        service = context.build_matching_service(repo)
        matches = service.match_for_booking(args.booking_id, area=area, top_k=args.top_k)
        _print_json({
            "booking_id": args.booking_id,
            "count": len(matches),
            "matches": [m.to_dict() for m in matches],
        })
    return 0


def cmd_score(context: AppContext, args) -> int:
    with matching_uow() as repo:
        service = context.build_matching_service(repo)
        match = service.get_match_score(args.cleaner_id, args.booking_id)
        _print_json(match.to_dict())
    return 0


def cmd_assign(context: AppContext, args) -> int:
    with matching_uow() as repo:
        service = context.build_matching_service(repo)
        match = service.auto_assign(args.booking_id)
        _print_json({
            "booking_id": args.booking_id,
            "assigned_cleaner_id": match.provider_id,
            "match": match.to_dict(),
        })
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CleanMatch - rank cleaners for bookings")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (default: ./config.yaml, then the repo copy)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    init_parser = subparsers.add_parser('init-db', help='Create the tables if they do not exist')
    init_parser.set_defaults(func=cmd_init_db)

    rank_parser = subparsers.add_parser('rank', help='Rank eligible cleaners for a booking')
    rank_parser.add_argument('booking_id')
    rank_parser.add_argument('--top-k', type=int, default=None,
                             help='Return at most N matches (overrides the result policy)')
    rank_parser.add_argument('--city', type=str, default=None,
                             help='Only consider cleaners in this city')
    rank_parser.set_defaults(func=cmd_rank)

    score_parser = subparsers.add_parser('score', help='Score one cleaner against a booking')
    score_parser.add_argument('cleaner_id')
    score_parser.add_argument('booking_id')
    score_parser.set_defaults(func=cmd_score)

    assign_parser = subparsers.add_parser('assign', help='Assign the best cleaner to a booking')
    assign_parser.add_argument('booking_id')
    assign_parser.set_defaults(func=cmd_assign)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format
    )

    top_k = getattr(args, 'top_k', None)
    if top_k is not None and top_k < 1:
        logger.error("--top-k must be at least 1")
        return 2

    database.configure_engine(config.database.url)
    context = AppContext.build(config)
    try:
        return args.func(context, args)
    except MatchingError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    finally:
        context.close()


if __name__ == "__main__":
    sys.exit(main())
