import importlib.util
from pathlib import Path

from rlesearch import cli
from rlesearch.utils.game_of_life import Pattern
from rlesearch.utils.history import HistoryPattern


SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "generate_samples.py"


def load_script():
    spec = importlib.util.spec_from_file_location("generate_samples", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_write_template_requires_dead_ring(tmp_path):
    generate_samples = load_script()
    path = tmp_path / "block.rle"
    generate_samples.write_template(path, Pattern.read_rle("x = 2, y = 2", "2o$2o!"))
    template = HistoryPattern.from_file(path)
    assert template.cells.tolist() == [
        [0, 0, 0, 0],
        [0, 1, 1, 0],
        [0, 1, 1, 0],
        [0, 0, 0, 0],
    ]


def test_generated_corpus_is_searchable(tmp_path):
    generate_samples = load_script()
    output = tmp_path / "samples"
    planted = generate_samples.generate_corpus(
        output, 'beehive', num_samples=6, grid_size=(16, 16),
        planted_fraction=1.0, seed=1)
    assert len(planted) == 6
    assert len(list(output.glob("*.rle"))) == 6

    template = tmp_path / "beehive.rle"
    generate_samples.write_template(template, generate_samples.get_pattern('beehive'))
    found = cli.run(template, output, 1)
    assert sorted(name for name, _ in found) == planted
