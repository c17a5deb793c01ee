"""
Neuralator Report Module

Per-generation statistics handed to whoever displays or records them.

Classes:
    GenerationReport: Timings and statistics of one generation

Functions:
    log_report(report): Default reporter, logs a report with loguru
"""

from dataclasses import dataclass

from loguru import logger

@dataclass(frozen=True)
class GenerationReport:
    """
    Timings and statistics of one generation.
    All times are in seconds; the error sums are those of the best member.
    """
    elapsed           : float   # since the run started
    propagation_time  : float   # scoring the generation
    breeding_time     : float   # ranking, culling and breeding
    generation        : int
    best_score        : int
    training_set_size : int
    sum_of_custom     : float
    sum_of_roots      : float
    sum_of_squares    : float
    average_confidence: float
    stagnation        : int

def log_report(report: GenerationReport) -> None:
    logger.info(
        "Generation {:5d} | score {}/{} | custom {:.4f} | roots {:.4f} | squares {:.4f} | "
        "confidence {:.4f} | stagnant {} | propagation {:.3f}s | breeding {:.3f}s | total {:.1f}s",
        report.generation,
        report.best_score, report.training_set_size,
        report.sum_of_custom, report.sum_of_roots, report.sum_of_squares,
        report.average_confidence,
        report.stagnation,
        report.propagation_time, report.breeding_time, report.elapsed)
