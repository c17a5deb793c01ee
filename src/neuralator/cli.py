"""
Command line entry point.

Usage:
    neuralator                                   # sine demo with the default configuration
    neuralator --config examples/configs/config_sine.ini
    neuralator --data digits.csv --scale 16 --trials 10 --num-jobs 4
"""

import argparse
import sys

from loguru import logger

from neuralator.run.config     import Config
from neuralator.run.evolution  import Evolution
from neuralator.run.experiment import Experiment
from neuralator.run.training   import load_training_set, sine_training_set

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Evolve neural networks with a genetic algorithm')
    parser.add_argument('--config', help='INI configuration file (defaults are used otherwise)')
    parser.add_argument('--data', help='comma separated training set, expected output in the last column '
                                       '(defaults to one period of a sine wave)')
    parser.add_argument('--scale', type=float, default=1.0,
                        help='divisor applied to the inputs read with --data')
    parser.add_argument('--samples', type=int, default=256,
                        help='number of data in the sine training set')
    parser.add_argument('--generations', type=int, help='override the number of generations')
    parser.add_argument('--population-size', type=int, help='override the population size')
    parser.add_argument('--seed', type=int, help='override the random seed')
    parser.add_argument('--trials', type=int, default=1,
                        help='number of independent runs (more than 1 runs an experiment)')
    parser.add_argument('--num-jobs', type=int, default=1,
                        help='number of parallel jobs')
    parser.add_argument('--quiet', action='store_true', help='only log warnings and errors')
    return parser

def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.quiet:
        logger.remove()
        logger.add(sys.stderr, level='WARNING')

    config = Config(args.config)
    if args.generations is not None:
        config.generations = args.generations
    if args.population_size is not None:
        config.population_size = args.population_size
    if args.seed is not None:
        config.seed = args.seed

    if args.data:
        training_set = load_training_set(args.data, scale=args.scale)
    else:
        training_set = sine_training_set(args.samples, bits=config.layer_sizes[0])

    if args.trials > 1:
        experiment = Experiment(config, training_set, args.trials)
        experiment.run(num_jobs_trials=args.num_jobs, num_jobs_fitness=1)
    else:
        winner = Evolution(config, training_set).run(num_jobs=args.num_jobs)
        print("Winner!")
        print(f"Score out of {len(training_set)}: {winner.score.matches}")
        print(f"Confidence: {winner.score.average_confidence:.4f}")

    return 0

if __name__ == '__main__':
    sys.exit(main())
