from __future__ import annotations
"""Train an intent classifier from a CSV and serve predictions interactively.

Example:
  python src/cli/interactive.py --data intents.csv --log low_confidence.log

Startup failures (missing training file, fewer than two intents, fit errors,
bad config) print a diagnostic to stderr and exit with status 1. Otherwise
the session runs until a blank line, 'exit' or end of input and exits 0.

Settings may come from a JSON config file (--config) whose keys map onto
IntentConfig fields; CLI flags override config file values.
"""
import argparse, json, sys, time
from collections import Counter
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.config import IntentConfig, build_config, load_config_file, FEATURIZERS, KEY_ORDERS
from core.dataset import load_user_queries, distinct_intents
from core.errors import IntentClassifierError
from intents.engine import PredictionEngine, resolve_labels
from intents.low_confidence import LowConfidenceLog
from intents.metrics import evaluate
from intents.pipeline import train_intent_model
from intents.session import InteractiveSession


def build_parser():
    p = argparse.ArgumentParser(description='Interactive intent classifier with low-confidence logging.')
    p.add_argument('--data', dest='data_path', default=None, help='Training CSV (Text,Intent). Default: intents.csv')
    p.add_argument('--log', dest='log_path', default=None, help='Low-confidence log file. Default: low_confidence.log')
    p.add_argument('--config', help='Optional JSON config file')
    p.add_argument('--threshold', type=float, default=None, help='Log predictions whose top score is below this (default 0.6)')
    p.add_argument('--seed', type=int, default=None, help='Seed the trainer for reproducible fits (default unseeded)')
    p.add_argument('--featurizer', choices=FEATURIZERS, default=None, help='Text featurizer (default tfidf)')
    p.add_argument('--hash-features', dest='hash_features', type=int, default=None, help='Feature width for the hashing featurizer')
    p.add_argument('--key-order', dest='key_order', choices=KEY_ORDERS, default=None, help='Label key ordering (default occurrence)')
    p.add_argument('--max-iter', dest='max_iter', type=int, default=None)
    p.add_argument('--C', dest='c', type=float, default=None, help='Inverse regularization strength (default 1.0)')
    p.add_argument('--show-scores', dest='show_scores', action='store_true', default=None, help='Print every label score, sorted')
    p.add_argument('--report', action='store_true', help='Print a JSON training summary to stderr before the session starts')
    return p


def make_config(args) -> IntentConfig:
    file_values = load_config_file(args.config) if args.config else {}
    overrides = {k: v for k, v in vars(args).items() if k not in ('config', 'report')}
    return build_config(file_values, overrides)


def training_summary(queries, engine: PredictionEngine, cfg: IntentConfig, elapsed: float) -> dict:
    return {
        'data': cfg.data_path,
        'examples': len(queries),
        'intents': distinct_intents(queries, cfg.key_order),
        'class_distribution': Counter(q.intent for q in queries),
        'train_accuracy': round(evaluate(engine, queries).accuracy, 3),
        'featurizer': cfg.featurizer,
        'seed': cfg.seed,
        'train_seconds': round(elapsed, 3),
    }


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = make_config(args)
        queries = load_user_queries(cfg.data_path, has_header=cfg.has_header, separator=cfg.separator)
        start = time.time()
        model = train_intent_model(queries, cfg)
        elapsed = time.time() - start
    except IntentClassifierError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    engine = PredictionEngine(model)
    if args.report:
        print(json.dumps(training_summary(queries, engine, cfg, elapsed), indent=2), file=sys.stderr)
    labels = resolve_labels(model, queries, cfg.key_order) if cfg.show_scores else None
    session = InteractiveSession(
        engine,
        LowConfidenceLog(cfg.log_path, threshold=cfg.threshold),
        labels=labels,
        show_scores=cfg.show_scores,
    )
    return session.run()


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
