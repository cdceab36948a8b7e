"""Tests for the bundle reporter."""

import json

import pytest

from bundle_ga.reporting import BundleReporter, RunObserver


@pytest.fixture
def observed_run(tmp_path, ga_factory, search_config, random_catalog):
    reporter = BundleReporter(tmp_path / "results", random_catalog)
    result = ga_factory(search_config, random_catalog, seed=21, observers=[reporter]).run()
    return reporter, result


def test_reporter_records_every_generation(observed_run):
    reporter, result = observed_run

    table = reporter.generation_table()

    assert table['generation'].tolist() == list(range(9))
    assert table['max_fitness'].tolist() == result.max_fitness_history
    assert table['mutations'].tolist()[:-1] == [6] * 8
    assert table['mutations'].tolist()[-1] == 0
    assert reporter.result is result


def test_report_has_all_sections(observed_run):
    reporter, result = observed_run

    text = reporter.generate_report().read_text()

    for section in ("CONFIGURATION", "BEST BUNDLE", "GENERATION STATISTICS", "FINAL POPULATION"):
        assert section in text
    assert result.termination_reason in text


def test_save_results_writes_json_and_csv(observed_run):
    reporter, result = observed_run

    paths = reporter.save_results()

    assert len(paths) == 3
    assert all(path.exists() for path in paths)
    data = json.loads(paths[0].read_text())
    assert len(data['history']) == len(result.history)
    assert data['best_bundle']['fitness'] == result.best_bundle.fitness


def test_bundle_table_matches_population(observed_run):
    reporter, result = observed_run

    table = reporter.bundle_table(result)

    assert len(table) == len(result.population)
    assert table['fitness'].tolist() == result.fitness


def test_print_summary(observed_run, capsys):
    reporter, _ = observed_run

    reporter.print_summary()

    assert "BUNDLE SEARCH SUMMARY" in capsys.readouterr().out


def test_reporting_without_result_fails(tmp_path, random_catalog):
    reporter = BundleReporter(tmp_path, random_catalog)

    with pytest.raises(RuntimeError):
        reporter.generate_report()


def test_base_observer_ignores_events():
    observer = RunObserver()

    assert observer.on_generation(0, [], [], None) is None
    assert observer.on_offspring(0, [], [], [], False) is None
    assert observer.on_run_end(None) is None


def test_price_formatting(tmp_path, random_catalog):
    reporter = BundleReporter(tmp_path, random_catalog)

    assert reporter.format_price(9000) == "90.00"
    assert reporter.format_price(5) == "0.05"


def test_report_lists_evaluated_chromosomes(observed_run):
    reporter, result = observed_run

    text = reporter.generate_report().read_text()

    assert f"Distinct chromosomes evaluated: {result.evaluated_chromosomes}" in text
