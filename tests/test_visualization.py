"""Tests for evolution plots and the end-to-end runner."""

from bundle_ga.config import GAConfig
from bundle_ga.visualization import EvolutionVisualizer
from run_bundle_search import BundleSearchRunner


def test_all_plots_are_saved(tmp_path, ga_factory, search_config, random_catalog):
    result = ga_factory(search_config, random_catalog, seed=5).run()

    paths = EvolutionVisualizer(tmp_path / "plots", random_catalog).generate_all_plots(result)

    assert [path.name for path in paths] == ["fitness_curves.png", "diversity.png", "best_bundle.png"]
    assert all(path.exists() and path.stat().st_size > 0 for path in paths)


def test_runner_generates_catalog_and_outputs(tmp_path, capsys):
    config = GAConfig(universe_size=8, population_size=6, max_generations=3, random_seed=2)

    runner = BundleSearchRunner(config, output_dir=str(tmp_path))
    result = runner.run()

    assert (tmp_path / "products.csv").exists()
    assert (tmp_path / "bundle_report.txt").exists()
    assert (tmp_path / "plots" / "fitness_curves.png").exists()
    assert len(result.history) == 4
    assert "BUNDLE SEARCH SUMMARY" in capsys.readouterr().out


def test_runner_takes_universe_size_from_catalog_file(tmp_path, capsys):
    catalog_file = tmp_path / "products.txt"
    catalog_file.write_text("10,0,3000\n20,1,3000\n30,0,3000\n40,1,3000\n")
    config = GAConfig(population_size=4, max_generations=2, random_seed=3)

    runner = BundleSearchRunner(config, catalog_file=str(catalog_file), output_dir=str(tmp_path / "out"))
    result = runner.run()

    assert config.universe_size == 4
    assert all(len(ind.chromosome) == 4 for ind in result.population)
