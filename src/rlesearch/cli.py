"""
Command-line driver: search a directory of RLE patterns for one object.
"""
import argparse
import logging
from concurrent.futures import ProcessPoolExecutor
from itertools import repeat
from pathlib import Path
from typing import List, Optional, Tuple

from tqdm import tqdm

from .utils import rle
from .utils.game_of_life import Pattern
from .utils.history import HistoryPattern
from .search.engine import Match, ObjectSearch


logger = logging.getLogger(__name__)

DEFAULT_OBJECT = "quadri_snark.rle"
DEFAULT_DIRECTORY = "."
DEFAULT_TICKS = 64
DEFAULT_GLOB = "*.rle"


def load_background(path) -> Pattern:
    """Load a background pattern written with either o/b or ./A-Z tags."""
    lines = rle.read_lines(path)
    if rle.guess_kind(lines) == 'life':
        return Pattern.read_rle(*lines)
    return HistoryPattern.read_rle(*lines).to_pattern()


def load_candidates(directory, pattern: str = DEFAULT_GLOB) -> List[Tuple[str, Pattern]]:
    """
    Load every candidate file in ``directory``.

    Files that fail to parse are logged and skipped.

    Returns:
        (name, background) pairs in file name order
    """
    candidates = []
    for path in sorted(Path(directory).glob(pattern)):
        try:
            candidates.append((path.stem, load_background(path)))
        except rle.RLEError as e:
            logger.warning("Skipping %s: %s", path.name, e)
    return candidates


def format_match(name: str, match: Match) -> str:
    return (f"{name:<9}| x ={match.x:4} ! {match.x_percent:3}% "
            f"| y ={match.y:4} ! {match.y_percent:3}% "
            f"| t ={match.tick:3} | o = {match.orientation}")


def _search_one(searcher: ObjectSearch, background: Pattern, ticks: int):
    try:
        return searcher.search(background, ticks), None
    except ValueError as e:
        return None, str(e)


def run(object_path, directory, ticks: int,
        pattern: str = DEFAULT_GLOB,
        workers: int = 1,
        plot_dir: Optional[str] = None) -> List[Tuple[str, Match]]:
    """
    Search every candidate in ``directory`` and print the matches.

    Args:
        object_path: RLE template of the object to look for
        directory: Directory holding the candidate patterns
        ticks: Number of generations to test per candidate
        pattern: Glob selecting candidate files
        workers: Number of worker processes
        plot_dir: Directory for match snapshots, None to skip them

    Returns:
        (name, match) for every candidate where the object was found
    """
    obj = HistoryPattern.from_file(object_path)
    searcher = ObjectSearch(obj)

    print(f"Loading {len(list(Path(directory).glob(pattern)))} patterns...", end="", flush=True)
    candidates = load_candidates(directory, pattern)
    print(" Done")

    names = [name for name, _ in candidates]
    backgrounds = [background for _, background in candidates]
    if workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            outcomes = list(tqdm(
                executor.map(_search_one, repeat(searcher), backgrounds, repeat(ticks)),
                total=len(backgrounds), desc="Searching", leave=False))
    else:
        outcomes = [_search_one(searcher, background, ticks)
                    for background in tqdm(backgrounds, desc="Searching", leave=False)]

    if plot_dir is not None:
        from .utils.visualization import visualize_match
        Path(plot_dir).mkdir(parents=True, exist_ok=True)

    found = []
    for name, (match, error) in zip(names, outcomes):
        if error is not None:
            logger.warning("Skipping %s: %s", name, error)
            continue
        if match is None:
            continue
        found.append((name, match))
        print(format_match(name, match))
        if plot_dir is not None:
            visualize_match(name, match, str(Path(plot_dir) / f"{name}.png"))

    print(f"{len(found)} patterns found")
    return found


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rlesearch",
        description="Find an object in a directory of Game of Life patterns")
    parser.add_argument('-o', '--object', default=DEFAULT_OBJECT,
                        help="RLE template of the object to find")
    parser.add_argument('-d', '--directory', default=DEFAULT_DIRECTORY,
                        help="Directory of candidate patterns")
    parser.add_argument('-t', '--ticks', type=int, default=DEFAULT_TICKS,
                        help="Generations to simulate per candidate")
    parser.add_argument('--pattern', default=DEFAULT_GLOB,
                        help="Glob selecting candidate files")
    parser.add_argument('--workers', type=int, default=1,
                        help="Number of worker processes")
    parser.add_argument('--plot-dir', default=None,
                        help="Save a PNG snapshot of every match here")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the search."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.ticks < 1:
        parser.error("--ticks must be at least 1")
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")

    run(args.object, args.directory, args.ticks,
        pattern=args.pattern, workers=args.workers, plot_dir=args.plot_dir)
    return 0
