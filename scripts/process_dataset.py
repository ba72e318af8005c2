#!/usr/bin/env python3
"""
Process a tabular dataset for model training.

Loads the model configuration (JSON) and the data file (CSV/Parquet), runs
data balancing and feature selection in the configured order, prints the
feature selection report and optionally writes the processed data plus a
JSON summary.

Usage:
    python scripts/process_dataset.py --config modelconfig.json --data train.csv
    python scripts/process_dataset.py --config modelconfig.json --data train.parquet \
        --output processed.parquet --log-level DEBUG
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from tabprep import DataProcessor, ProcessingContext, load_dataset, load_model_config
from tabprep.exceptions import ProcessingError
from tabprep.utils import configure_logging

logger = logging.getLogger(__name__)


def write_output(processed, output_path: Path) -> None:
    """Write processed frame and a JSON summary next to it."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame = processed.data.to_pandas()

    if output_path.suffix.lower() in ('.parquet', '.pq'):
        frame.to_parquet(output_path)
    else:
        # Vector column as a JSON list per row
        frame['Features'] = frame['Features'].apply(lambda v: json.dumps([float(x) for x in v]))
        frame.to_csv(output_path, index=False)

    summary_path = output_path.with_suffix('.summary.json')
    with open(summary_path, 'w') as f:
        json.dump(processed.to_dict(), f, indent=2, default=str)

    logger.info(f"Processed data written to {output_path}, summary to {summary_path}")


async def run(args) -> int:
    config = load_model_config(args.config)
    enabled_fields = config.enabled_fields()
    dataset = load_dataset(args.data, enabled_fields, config.target_field)

    processor = DataProcessor(context=ProcessingContext(seed=args.seed))
    processed = await processor.process_data(dataset, enabled_fields, config)

    print(processed.selection_report or "No feature selection performed.")
    print(f"Original samples: {processed.original_sample_count}")
    print(f"Balanced samples: {processed.balanced_sample_count}")
    print(f"Features ({len(processed.feature_names)}): {', '.join(processed.feature_names)}")

    if args.output:
        write_output(processed, Path(args.output))
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description='Feature selection and data balancing for training data')
    parser.add_argument('--config', required=True, help='Model configuration JSON file')
    parser.add_argument('--data', required=True, help='Input data file (CSV or Parquet)')
    parser.add_argument('--output', default=None, help='Output file for processed data (CSV or Parquet)')
    parser.add_argument('--seed', type=int, default=42, help='Random seed for PCA/SMOTE')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level')

    args = parser.parse_args()
    configure_logging(args.log_level)

    try:
        return asyncio.run(run(args))
    except (ProcessingError, FileNotFoundError) as e:
        logger.error(f"Processing failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
