"""
Command line entry point for the YouTube chapter generator.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from ytchapters.config import config
from ytchapters.core.pipeline import VideoInsightPipeline
from ytchapters.core.video_id import build_timestamp_url, extract_video_id
from ytchapters.models.schemas import GenerationResult
from ytchapters.utils.error_handling import DiagnosticLog, InvalidVideoUrlError, TranscriptNotFoundError
from ytchapters.utils.helpers import save_json
from ytchapters.utils.logger import logging


def save_result(result: GenerationResult, video_id: str, output_file: Optional[str] = None) -> Path:
    """Save the generated timestamps and summary to a JSON file."""
    if output_file is None:
        output_dir = Path(config.SUMMARIES_DIR)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_file = output_dir / f"{video_id}_insights.json"
    else:
        output_file = Path(output_file)

    save_json(result.model_dump(), str(output_file))

    logging.info(f"Result saved to: {output_file}")
    return output_file


def generate_video_insights(
    url: str,
    model: Optional[str] = None,
    output_file: Optional[str] = None,
    pipeline: Optional[VideoInsightPipeline] = None,
) -> GenerationResult:
    """
    Generate timestamps and a summary for a YouTube video and save them.

    Args:
        url: YouTube video URL
        model: Gemini model name overriding the configured default
        output_file: Optional file path to save the result
        pipeline: Pipeline to use instead of building one from config

    Returns:
        GenerationResult object
    """
    pipeline = pipeline or VideoInsightPipeline.from_config(config, model_name=model)
    diagnostics = DiagnosticLog()

    result = pipeline.run(url, diagnostics)

    for record in diagnostics.records:
        logging.debug(f"Recovered failure in {record.layer}: {record.cause}")

    save_result(result, extract_video_id(url), output_file)
    return result


def main():
    """Main function to run the application from command line."""
    parser = argparse.ArgumentParser(description="YouTube Chapter & Summary Generator")
    parser.add_argument("url", help="YouTube video URL")
    parser.add_argument("--model", default=None,
                        help=f"Gemini model to use (default: {config.DEFAULT_MODEL})")
    parser.add_argument("--output", help="Output file path for the result")

    args = parser.parse_args()

    try:
        result = generate_video_insights(args.url, args.model, args.output)
    except (InvalidVideoUrlError, TranscriptNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    video_id = extract_video_id(args.url)

    print("\n" + "=" * 80)
    print("Timestamps")
    print("=" * 80)
    for segment in result.timestamps:
        print(f"{segment.time:>8}  {segment.title}")
        try:
            print(f"          {build_timestamp_url(video_id, segment.time)}")
        except ValueError:
            # Model returned a time we cannot link to
            continue
    print("=" * 80)
    print("Summary")
    print("=" * 80)
    print(result.summary)
    print("=" * 80)


if __name__ == "__main__":
    main()
