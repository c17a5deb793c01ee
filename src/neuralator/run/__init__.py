"""
Neuralator Run Package

Modules:
    config:     Config class (INI file or defaults)
    training:   TrainingDatum and training set builders
    report:     GenerationReport and the default logging reporter
    evolution:  Evolution class and run_evolution
    experiment: Experiment class (several independent runs)
"""

# Only the modules the network package depends on are imported here,
# the others are imported from 'neuralator' once the network package is loaded.
from neuralator.run.config   import Config
from neuralator.run.training import TrainingDatum, load_training_set, sine_training_set, validate_training_set

__all__ = ['Config',
           'TrainingDatum',
           'load_training_set',
           'sine_training_set',
           'validate_training_set']
