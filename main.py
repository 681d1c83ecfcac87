from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass
from pathlib import Path
import sys

from loguru import logger

from app.viewmodels.points_vm import PointsVM
from core.errors import BiomeHuntError
from core.items import HUNT_ITEMS
from core.services.biome_scoring_service import BiomeScoringService
from core.services.capture_flow import CaptureFlow
from core.services.score_service import ScoreService
from infrastructure.biome_config import load_geo_index
from infrastructure.bonus_ledger import SqliteBonusLedger
from infrastructure.capture_repository import SqliteCaptureRepository
from infrastructure.database import Database
from infrastructure.delete_service import CaptureDeleteService
from infrastructure.events import ChangeNotifier
from infrastructure.location import FixedLocationProvider
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings
from infrastructure.utils import read_gps_from_image

BASE_DIR = Path(__file__).parent


@dataclass
class AppServices:
    db: Database
    notifier: ChangeNotifier
    captures: SqliteCaptureRepository
    ledger: SqliteBonusLedger
    scoring: BiomeScoringService
    scores: ScoreService
    deleter: CaptureDeleteService


def build_services(settings: JsonSettings) -> AppServices:
    db = Database(settings.get_path("storage.database_path", "data/app.db"))
    notifier = ChangeNotifier()
    captures = SqliteCaptureRepository(db, notifier)
    ledger = SqliteBonusLedger(db, notifier)
    geo = load_geo_index(settings.get_path("biomes.config_path", "data/biomes.json"))
    return AppServices(
        db=db,
        notifier=notifier,
        captures=captures,
        ledger=ledger,
        scoring=BiomeScoringService(geo, ledger),
        scores=ScoreService(captures, ledger),
        deleter=CaptureDeleteService(captures, bool(settings.get("captures.send_to_trash", True))),
    )


def _parse_fix(value: str) -> tuple[float, float]:
    """argparse type for a "lat,lon" fix."""
    try:
        lat, lon = (float(x) for x in value.split(",", 1))
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"expected 'lat,lon', got {value!r}") from ex
    return lat, lon


async def _capture(services: AppServices, args: argparse.Namespace) -> int:
    if args.lat is not None and args.lon is not None:
        exif_gps = (args.lat, args.lon)
    else:
        exif_gps = read_gps_from_image(args.photo)
    flow = CaptureFlow(
        services.captures,
        services.scoring,
        FixedLocationProvider(args.gps_fix),
        delete_capture=services.deleter.delete_capture,
    )
    thumb = args.thumbnail or args.photo
    if args.replace is not None:
        outcome = await flow.replace_capture(args.replace, args.item, args.photo, thumb, exif_gps)
    else:
        outcome = await flow.record_capture(args.item, args.photo, thumb, exif_gps)
    bonus = outcome.bonus
    if outcome.deferred is not None:
        bonus = await outcome.deferred
    print(f"capture {outcome.capture_id} stored")
    if bonus.awarded:
        print(f"bonus +{bonus.bonus_points} in {bonus.biome_label} (x{bonus.multiplier})")
    return 0


def _score(services: AppServices) -> int:
    vm = PointsVM(services.scores, services.notifier)
    try:
        if vm.is_empty:
            print("No points yet. Capture items to earn points.")
        for entry in vm.entries:
            print(f"{entry.title:<24} {vm.entry_label(entry)}")
        print(f"Total: {vm.total} ({vm.progress:.0%} of {vm.max_total})")
    finally:
        vm.close()
    return 0


def _biomes(services: AppServices) -> int:
    if not services.scoring.bonuses_available:
        print("Biome configuration unavailable; bonuses are disabled.")
    for b in services.scoring.list_biomes():
        print(f"{b.id:<20} {b.label:<28} x{b.multiplier:<5} r={b.radius_meters:.0f}m")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="biome-hunt", description="Photo scavenger hunt scoring")
    parser.add_argument("--settings", default=str(BASE_DIR / "settings.json"))
    sub = parser.add_subparsers(dest="command", required=True)

    cap = sub.add_parser("capture", help="record a capture of a hunt item")
    cap.add_argument("item", choices=[i.id for i in HUNT_ITEMS])
    cap.add_argument("--photo", required=True)
    cap.add_argument("--thumbnail")
    cap.add_argument("--lat", type=float)
    cap.add_argument("--lon", type=float)
    cap.add_argument("--gps-fix", type=_parse_fix, help="live fix 'lat,lon' used when the photo has no EXIF GPS")
    cap.add_argument("--replace", type=int, help="capture id to replace")

    rm = sub.add_parser("delete", help="delete a capture and its bonuses")
    rm.add_argument("capture_id", type=int)

    sub.add_parser("score", help="show the points breakdown")
    sub.add_parser("biomes", help="list bonus zones")
    sub.add_parser("reset", help="remove all captures and bonuses")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = JsonSettings(args.settings)
        log_dir = settings.get_path("logging.directory")
        init_logging(str(log_dir) if log_dir else None, settings.get("logging.level", "INFO"))
        services = build_services(settings)
    except BiomeHuntError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 2

    try:
        if args.command == "capture":
            return asyncio.run(_capture(services, args))
        if args.command == "delete":
            result = services.deleter.delete_capture(args.capture_id)
            for path, reason in result.failed:
                print(f"could not remove {path}: {reason}", file=sys.stderr)
            return 0
        if args.command == "score":
            return _score(services)
        if args.command == "biomes":
            return _biomes(services)
        if args.command == "reset":
            services.captures.clear_all()
            return 0
    except BiomeHuntError as ex:
        logger.error("Command {} failed: {}", args.command, ex)
        print(f"error: {ex}", file=sys.stderr)
        return 1
    finally:
        services.db.close()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
