"""
Generate a sample corpus for object searches: random soups, some with a
planted object, plus the matching object template.
"""
import argparse
from pathlib import Path

import numpy as np
from tqdm import tqdm

from rlesearch.utils import rle
from rlesearch.utils.patterns import get_pattern, PATTERN_CATEGORIES
from rlesearch.utils.soup import random_soup, plant


def write_template(file_path, obj, border=1):
    """
    Write ``obj`` as a template that also requires ``border`` dead cells around it.

    Args:
        file_path: Output file path
        obj: Pattern to describe
        border: Width of the dead ring around the object
    """
    state = np.pad(obj.to_array(), border)
    lines = rle.encode(state, comment="object template")
    header = 2
    data = [line.replace('o', 'A').replace('b', '.') for line in lines[header:]]
    Path(file_path).write_text("\n".join(lines[:header] + data) + "\n")


def generate_corpus(output_dir, object_name, num_samples=100, grid_size=(32, 32),
                    density=0.3, planted_fraction=0.5, seed=None):
    """
    Write ``num_samples`` candidate files to ``output_dir``.

    Args:
        output_dir: Directory for the candidate files
        object_name: Library pattern planted into some candidates
        num_samples: Number of candidates
        grid_size: Candidate dimensions as (height, width)
        density: Probability of alive cell in the soup
        planted_fraction: Fraction of candidates that receive the object
        seed: Random seed

    Returns:
        Names of the candidates holding a planted object
    """
    rng = np.random.default_rng(seed)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    obj = get_pattern(object_name)
    h, w = grid_size
    planted = []

    for i in tqdm(range(num_samples), desc="Writing candidates"):
        name = f"soup{i:04d}"
        soup = random_soup(grid_size, density, rng)
        comment = "random soup"
        if rng.random() < planted_fraction:
            x = int(rng.integers(1, max(w - obj.width, 2)))
            y = int(rng.integers(1, max(h - obj.height, 2)))
            soup = plant(soup, obj, x, y)
            comment = f"{object_name} planted at ({x}, {y})"
            planted.append(name)
        soup.write_rle(output_dir / f"{name}.rle", comment)

    return planted


def main():
    """Generate the sample corpus."""
    available = [name for category in PATTERN_CATEGORIES.values() for name in category]
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--output', default='data/samples', help="Output directory")
    parser.add_argument('--object', default='beehive', choices=available,
                        help="Object planted into the soups")
    parser.add_argument('--num-samples', type=int, default=100)
    parser.add_argument('--size', type=int, default=32, help="Soup width and height")
    parser.add_argument('--density', type=float, default=0.3)
    parser.add_argument('--planted-fraction', type=float, default=0.5)
    parser.add_argument('--seed', type=int, default=42)
    args = parser.parse_args()

    print("=" * 60)
    print("Sample Corpus Generation")
    print("=" * 60)
    print(f"  Object: {args.object}")
    print(f"  Grid size: {args.size}x{args.size}")
    print(f"  Density: {args.density}")
    print(f"  Samples: {args.num_samples}")

    planted = generate_corpus(
        args.output, args.object,
        num_samples=args.num_samples,
        grid_size=(args.size, args.size),
        density=args.density,
        planted_fraction=args.planted_fraction,
        seed=args.seed,
    )

    template_path = Path(args.output).parent / f"{args.object}.rle"
    write_template(template_path, get_pattern(args.object))

    print(f"\nWrote {args.num_samples} candidates to {Path(args.output).absolute()}")
    print(f"  Planted: {len(planted)}")
    print(f"  Template: {template_path}")
    print(f"\nSearch with: rlesearch -o {template_path} -d {args.output} -t 1")


if __name__ == "__main__":
    main()
