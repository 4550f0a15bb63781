"""Tests for configuration loading and artifact/table I/O."""

import pickle

import joblib
import pandas as pd
import pytest

from m6a_prediction.inference.io_utils import (
    load_classifier,
    read_feature_table,
    resolve_model_path,
    write_predictions,
)
from m6a_prediction.inference.predictor import M6APredictor, predict_batch
from m6a_prediction.system.config import DEFAULT_CONFIG_PATH, PredictionConfig, load_config


class TestConfig:

    def test_packaged_default(self, monkeypatch):
        monkeypatch.delenv("M6A_MODEL_PATH", raising=False)
        monkeypatch.delenv("M6A_POSITIVE_THRESHOLD", raising=False)

        cfg = load_config()
        assert DEFAULT_CONFIG_PATH.exists()
        assert cfg.model_path is None
        assert cfg.positive_threshold == 0.5
        assert cfg.positive_label == 'Positive'

    def test_yaml_values_and_relative_model_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv("M6A_MODEL_PATH", raising=False)
        monkeypatch.delenv("M6A_POSITIVE_THRESHOLD", raising=False)
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("model_path: models/rf_fit.joblib\npositive_threshold: 0.7\n")

        cfg = load_config(config_file)
        assert cfg.model_path == tmp_path / "models" / "rf_fit.joblib"
        assert cfg.positive_threshold == 0.7

    def test_environment_overrides(self, tmp_path, monkeypatch):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("model_path: a.joblib\npositive_threshold: 0.7\n")
        monkeypatch.setenv("M6A_MODEL_PATH", "/opt/models/rf_fit.pkl")
        monkeypatch.setenv("M6A_POSITIVE_THRESHOLD", "0.65")

        cfg = load_config(config_file)
        assert str(cfg.model_path) == "/opt/models/rf_fit.pkl"
        assert cfg.positive_threshold == 0.65

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_dataclass_coerces_types(self):
        cfg = PredictionConfig(model_path="rf.joblib", positive_threshold="0.4")
        assert cfg.model_path.name == "rf.joblib"
        assert cfg.positive_threshold == 0.4


class TestLoadClassifier:

    def test_joblib_artifact(self, tmp_path, rf_classifier, sample_sites):
        path = tmp_path / "rf_fit.joblib"
        joblib.dump(rf_classifier, path)

        loaded = load_classifier(path)
        pd.testing.assert_frame_equal(
            predict_batch(loaded, sample_sites),
            predict_batch(rf_classifier, sample_sites),
        )

    def test_pickle_artifact(self, tmp_path, rf_classifier):
        path = tmp_path / "model.pkl"
        with open(path, 'wb') as f:
            pickle.dump(rf_classifier, f)

        assert hasattr(load_classifier(path), 'predict_proba')

    def test_directory_prefers_default_name(self, tmp_path, rf_classifier):
        joblib.dump(rf_classifier, tmp_path / "other.joblib")
        joblib.dump(rf_classifier, tmp_path / "rf_fit.joblib")
        assert resolve_model_path(tmp_path).name == "rf_fit.joblib"
        assert hasattr(load_classifier(tmp_path), 'predict_proba')

    def test_empty_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_classifier(tmp_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_classifier(tmp_path / "absent.joblib")

    def test_object_without_predict_proba(self, tmp_path):
        path = tmp_path / "not_a_model.pkl"
        with open(path, 'wb') as f:
            pickle.dump({'type': 'config'}, f)

        with pytest.raises(TypeError, match="predict_proba"):
            load_classifier(path)

    def test_predictor_from_config(self, tmp_path, rf_classifier, sample_sites):
        path = tmp_path / "rf_fit.joblib"
        joblib.dump(rf_classifier, path)

        predictor = M6APredictor.from_config(PredictionConfig(model_path=path, positive_threshold=0.6))
        assert predictor.positive_threshold == 0.6
        assert predictor.predict(sample_sites).shape[0] == 2

    def test_predictor_from_config_without_model(self):
        with pytest.raises(ValueError):
            M6APredictor.from_config(PredictionConfig())


class TestFeatureTables:

    def test_csv_round_trip(self, tmp_path, sample_sites):
        path = tmp_path / "sites.csv"
        sample_sites.to_csv(path, index=False)

        table = read_feature_table(path)
        assert table['DNA_5mer'].tolist() == ['GGACC', 'TGACC']
        assert table['RNA_region'].tolist() == ['CDS', "3'UTR"]

    def test_tsv(self, tmp_path, sample_sites):
        path = tmp_path / "sites.tsv"
        sample_sites.to_csv(path, sep='\t', index=False)
        assert read_feature_table(path).shape == sample_sites.shape

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "sites.xlsx"
        path.write_text("")
        with pytest.raises(ValueError, match="Unsupported table format"):
            read_feature_table(path)

    def test_write_predictions_by_suffix(self, tmp_path, sample_sites):
        out = write_predictions(sample_sites, tmp_path / "out" / "pred.tsv")
        assert pd.read_csv(out, sep='\t').shape == sample_sites.shape
