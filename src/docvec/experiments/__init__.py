# Experiment orchestration and plotting

from .experimental_pipeline import ExperimentalPipeline

__all__ = ["ExperimentalPipeline"]
