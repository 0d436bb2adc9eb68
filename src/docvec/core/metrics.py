#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Classification metrics for models fitted on document feature matrices.

- Accuracy
- Precision / Recall / F1 (binary, macro)
- Confusion matrix
"""

from typing import Any, Dict, List, Optional

import numpy as np
from loguru import logger


def confusion_matrix(y_true, y_pred, labels: Optional[List] = None) -> np.ndarray:
    """Rows are true labels, columns predicted labels, both in ``labels`` order."""
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")

    if labels is None:
        labels = sorted(set(y_true.tolist()) | set(y_pred.tolist()))
    label_to_idx = {label: i for i, label in enumerate(labels)}

    cm = np.zeros((len(labels), len(labels)), dtype=int)
    for t, p in zip(y_true.tolist(), y_pred.tolist()):
        cm[label_to_idx[t], label_to_idx[p]] += 1
    return cm


def accuracy_score(y_true, y_pred) -> float:
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")
    if len(y_true) == 0:
        return 0.0
    return float(np.mean(y_true == y_pred))


def _per_class(y_true, y_pred, labels):
    cm = confusion_matrix(y_true, y_pred, labels)
    tp = np.diag(cm).astype(float)
    pred_pos = cm.sum(axis=0).astype(float)
    true_pos = cm.sum(axis=1).astype(float)
    with np.errstate(divide="ignore", invalid="ignore"):
        precision = np.where(pred_pos > 0, tp / pred_pos, 0.0)
        recall = np.where(true_pos > 0, tp / true_pos, 0.0)
        f1 = np.where(precision + recall > 0, 2 * precision * recall / (precision + recall), 0.0)
    if np.any(pred_pos == 0):
        logger.debug("[metrics] precision ill-defined for some classes, set to 0")
    return precision, recall, f1


def _average(values: np.ndarray, labels: List, average: str, pos_label) -> float:
    if average == "binary":
        if len(labels) != 2:
            raise ValueError("binary averaging requires exactly 2 classes")
        idx = labels.index(pos_label) if pos_label in labels else 1
        return float(values[idx])
    if average == "macro":
        return float(np.mean(values))
    raise ValueError(f"Unknown average type: {average}")


def _labels(y_true, y_pred, labels):
    if labels is not None:
        return list(labels)
    return sorted(set(np.asarray(y_true).tolist()) | set(np.asarray(y_pred).tolist()))


def precision_score(y_true, y_pred, average: str = "binary", labels=None, pos_label=1) -> float:
    labels = _labels(y_true, y_pred, labels)
    p, _, _ = _per_class(y_true, y_pred, labels)
    return _average(p, labels, average, pos_label)


def recall_score(y_true, y_pred, average: str = "binary", labels=None, pos_label=1) -> float:
    labels = _labels(y_true, y_pred, labels)
    _, r, _ = _per_class(y_true, y_pred, labels)
    return _average(r, labels, average, pos_label)


def f1_score(y_true, y_pred, average: str = "binary", labels=None, pos_label=1) -> float:
    labels = _labels(y_true, y_pred, labels)
    _, _, f = _per_class(y_true, y_pred, labels)
    return _average(f, labels, average, pos_label)


def compute_all_metrics(y_true, y_pred) -> Dict[str, Any]:
    """Accuracy plus macro precision / recall / F1 (works for any number of classes)."""
    labels = _labels(y_true, y_pred, None)
    return {
        "accuracy": accuracy_score(y_true, y_pred),
        "precision": precision_score(y_true, y_pred, average="macro", labels=labels),
        "recall": recall_score(y_true, y_pred, average="macro", labels=labels),
        "f1": f1_score(y_true, y_pred, average="macro", labels=labels),
        "confusion_matrix": confusion_matrix(y_true, y_pred, labels).tolist(),
    }
