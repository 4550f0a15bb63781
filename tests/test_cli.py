"""Tests for the m6a-predict command line."""

import joblib
import pandas as pd
import pytest

from m6a_prediction.cli import main


@pytest.fixture
def model_file(tmp_path, rf_classifier):
    path = tmp_path / "rf_fit.joblib"
    joblib.dump(rf_classifier, path)
    return path


def test_batch_writes_predictions(tmp_path, model_file, sample_sites):
    input_path = tmp_path / "sites.csv"
    output_path = tmp_path / "predictions.csv"
    sample_sites.to_csv(input_path, index=False)

    code = main(["batch", "--input", str(input_path), "--output", str(output_path),
                 "--model", str(model_file), "--threshold", "0.6"])

    assert code == 0
    result = pd.read_csv(output_path)
    assert result.shape[0] == 2
    assert {'predicted_m6A_prob', 'predicted_m6A_status', 'nt_pos5'} <= set(result.columns)


def test_batch_to_stdout(tmp_path, model_file, sample_sites, capsys):
    input_path = tmp_path / "sites.csv"
    sample_sites.to_csv(input_path, index=False)

    assert main(["batch", "--input", str(input_path), "--model", str(model_file)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0].endswith("predicted_m6A_prob,predicted_m6A_status")


def test_single_prints_prob_and_status(model_file, capsys):
    code = main([
        "single", "--model", str(model_file),
        "--gc-content", "0.5", "--rna-type", "mRNA", "--rna-region", "CDS",
        "--exon-length", "10", "--distance-to-junction", "8",
        "--evolutionary-conservation", "0.5", "--dna-5mer", "GGACA",
    ])

    assert code == 0
    out = capsys.readouterr().out
    assert "predicted_m6A_status\tPositive" in out


def test_missing_model_exits_nonzero(tmp_path, sample_sites, monkeypatch):
    monkeypatch.delenv("M6A_MODEL_PATH", raising=False)
    input_path = tmp_path / "sites.csv"
    sample_sites.to_csv(input_path, index=False)

    assert main(["batch", "--input", str(input_path)]) == 1


def test_invalid_input_exits_nonzero(tmp_path, model_file, sample_sites):
    input_path = tmp_path / "sites.csv"
    sample_sites.drop(columns=['gc_content']).to_csv(input_path, index=False)

    assert main(["batch", "--input", str(input_path), "--model", str(model_file)]) == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out
