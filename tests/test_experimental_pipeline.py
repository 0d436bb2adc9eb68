# tests/test_experimental_pipeline.py
import json

from docvec.experiments.experimental_pipeline import ExperimentalPipeline


def test_run_and_save(sentiment_table, sentiment_docs, tmp_path):
    exp = ExperimentalPipeline(
        sentiment_table,
        {"cv_folds": 3, "reduction": "mean"},
        results_dir=str(tmp_path / "results"),
    )
    res = exp.run(sentiment_docs)
    assert res["features"] == {"rows": 12, "dim": 3, "reduction": "mean"}
    assert len(res["grid_search"]) == 3
    assert res["best_mean_f1"] > 0.9
    assert res["variable_importance"][0]["feature"].startswith("wordembed_text_d")
    assert "pca" not in res

    out = exp.save_results("run.json")
    saved = json.loads(out.read_text(encoding="utf-8"))
    assert saved["best_params"] == res["best_params"]


def test_run_with_pca(sentiment_table, sentiment_docs, tmp_path):
    exp = ExperimentalPipeline(
        sentiment_table,
        {"cv_folds": 2, "pca_components": 2},
        results_dir=str(tmp_path),
    )
    res = exp.run(sentiment_docs)
    assert len(res["pca"]["explained_variance_ratio"]) == 2
    assert res["variable_importance"][0]["feature"] in {"PC1", "PC2"}
    assert exp.reduced.n_rows == len(sentiment_docs)
