"""
Sine Wave Approximation with Neuralator

This example evolves networks that approximate one period of a sine wave.

The Problem:
    Datum 'i' (0 <= i < 256) presents the 8 bits of 'i' to the input layer,
    least significant bit first, and expects sin(i * 2pi / 255).

    The 21 output nodes stand for the values -1.0, -0.9, ..., 0.9, 1.0;
    the most active output node is the network's answer. An answer within
    0.05 of the expected value counts as a match, so a perfect network
    scores 256.

Usage:
    Single run:
        python examples/evolve_sine.py

    Experiment (several independent runs in parallel):
        python examples/evolve_sine.py --trials 8 --num-jobs -1
"""

import argparse
from pathlib import Path

from neuralator import Config, Evolution, Experiment, sine_training_set

CONFIG_FILE = Path(__file__).parent / 'configs' / 'config_sine.ini'

def main():
    parser = argparse.ArgumentParser(description='Evolve networks approximating a sine wave')
    parser.add_argument('--generations', type=int, default=200)
    parser.add_argument('--trials', type=int, default=1)
    parser.add_argument('--num-jobs', type=int, default=1)
    args = parser.parse_args()

    config = Config(str(CONFIG_FILE))
    config.generations = args.generations
    config.seed = 2024

    training_set = sine_training_set(256, bits=config.layer_sizes[0])

    if args.trials > 1:
        results = Experiment(config, training_set, args.trials).run(num_jobs_trials=args.num_jobs)
        for result in results:
            print(f"Trial {result.trial_number:3d}: {result.matches}/256 (live edges: {result.live_edges})")
    else:
        winner = Evolution(config, training_set).run(num_jobs=args.num_jobs)
        print(f"Winner scored {winner.score.matches}/256")
        print(winner)

if __name__ == '__main__':
    main()
