"""Command-Line Interface handler for LiveSub."""

import argparse
import logging
import signal
import sys

from .config_loader import ConfigLoader, validate_config
from .log_setup import setup_logging
from .segment_locator import SegmentLocator
from .audio_extractor import AudioExtractor, FfmpegTranscoder, SAMPLE_RATE
from .dedup_tracker import DedupTracker
from .adapter import TranscriptionTranslationAdapter
from .caption_timeline import CaptionTimeline
from .subtitle_formatter import get_formatter
from .retry_policy import FixedDelayPolicy
from .caption_generator import LiveCaptionGenerator
from .recognizer import Recognizer, GoogleSpeechRecognizer
from .translator import Translator, GoogleTranslator
from .exceptions import LiveSubError, ConfigurationError

logger = logging.getLogger(__name__) # Get logger for this module

def build_recognizer(config: dict) -> Recognizer:
    """Creates the recognition engine selected by 'recognition_engine'."""
    engine = config['recognition_engine']
    if engine == 'whisper':
        # Imported here so Google-only deployments never load torch
        from .whisper_recognizer import WhisperRecognizer
        device = config.get('device', 'cpu')
        return WhisperRecognizer(
            model_name=config.get('whisper_model', 'base'),
            device=device,
            fp16=config.get('whisper_fp16', True) if device == 'cuda' else False
        )
    return GoogleSpeechRecognizer(
        credentials_file=config.get('credentials_file'),
        timeout=config.get('request_timeout')
    )

def build_translator(config: dict) -> Translator:
    """Creates the translation engine selected by 'translation_engine'."""
    engine = config['translation_engine']
    if engine == 'huggingface':
        from .hf_translator import HuggingFaceTranslator
        return HuggingFaceTranslator(
            model_name=config.get('translation_model', 'Helsinki-NLP/opus-mt-en-es'),
            device=config.get('device', 'cpu')
        )
    return GoogleTranslator(
        credentials_file=config.get('credentials_file'),
        timeout=config.get('request_timeout')
    )

def build_generator(config: dict, recognizer: Recognizer, translator: Translator) -> LiveCaptionGenerator:
    """Wires a LiveCaptionGenerator from a validated configuration and two engines."""
    locator = SegmentLocator(
        manifest_path=config['manifest_path'],
        base_dir=config.get('segment_dir'),
        segment_suffix=config.get('segment_suffix', '.ts')
    )
    audio_extractor = AudioExtractor(
        FfmpegTranscoder(
            ffmpeg_path=config.get('ffmpeg_path'),
            timeout=config.get('transcoder_timeout')
        )
    )
    adapter = TranscriptionTranslationAdapter(
        recognizer,
        translator,
        sample_rate=SAMPLE_RATE,
        alternative_policy=config.get('alternative_policy', 'all')
    )
    timeline = CaptionTimeline(
        output_path=config['subtitle_path'],
        formatter=get_formatter(config.get('output_format', 'vtt')),
        cue_duration=float(config.get('cue_duration', 10))
    )
    return LiveCaptionGenerator(
        locator=locator,
        audio_extractor=audio_extractor,
        dedup_tracker=DedupTracker(config.get('fingerprint_algorithm', 'sha256')),
        adapter=adapter,
        timeline=timeline,
        source_language=config['source_language'],
        target_language=config['target_language'],
        project_id=config.get('project_id'),
        retry_policy=FixedDelayPolicy(float(config.get('poll_interval', 5)))
    )

class CLIHandler:
    """Parses arguments and runs the live captioning loop."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            description="LiveSub: Translated live captions for an HLS stream.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "-c", "--config",
            default="config.yaml",
            help="Path to the configuration YAML file."
        )
        parser.add_argument(
            "--log-level",
            default="INFO",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for console and file output."
        )
        parser.add_argument("--manifest", default=None, help="Override the HLS playlist path.")
        parser.add_argument("--segment-dir", default=None, help="Override the directory segments are resolved against.")
        parser.add_argument("-o", "--output", default=None, help="Override the subtitle output path.")
        parser.add_argument("--source-language", default=None, help="Override the spoken language code.")
        parser.add_argument("--target-language", default=None, help="Override the caption language code.")
        parser.add_argument("--project-id", default=None, help="Override the cloud project id.")
        parser.add_argument("--poll-interval", type=float, default=None, help="Override seconds between poll cycles.")
        parser.add_argument(
            "--max-cycles",
            type=int,
            default=None,
            help="Stop after this many poll cycles (default: run until interrupted)."
        )
        parser.add_argument(
            "--device",
            default=None,
            choices=["cuda", "cpu"],
            help="Override the device used by local Whisper/Hugging Face engines."
        )
        return parser

    def _apply_overrides(self, config: dict, args: argparse.Namespace) -> None:
        overrides = {
            'manifest_path': args.manifest,
            'segment_dir': args.segment_dir,
            'subtitle_path': args.output,
            'source_language': args.source_language,
            'target_language': args.target_language,
            'project_id': args.project_id,
            'poll_interval': args.poll_interval,
            'device': args.device,
        }
        for key, value in overrides.items():
            if value is not None:
                logger.info(f"Overriding {key} from config with CLI argument: {value}")
                config[key] = value

    def run(self, argv=None) -> None:
        """Parses arguments, sets up logging, loads config, and runs the poll loop."""
        args = self.parser.parse_args(argv)

        log_level = getattr(logging, args.log_level.upper(), logging.INFO)
        setup_logging(log_level=log_level, log_dir='logs', log_file='livesub_init.log')

        # --- Load Configuration ---
        try:
            config_loader = ConfigLoader()
            config = config_loader.load_config(args.config)
            config_loader.apply_env_overrides(config)
            self._apply_overrides(config, args)
            validate_config(config)
        except ConfigurationError as e:
            logger.critical(f"Invalid configuration from {args.config}: {e}")
            sys.exit(1)
        except FileNotFoundError:
            logger.critical(f"Configuration file not found: {args.config}")
            sys.exit(1)

        setup_logging(log_level=log_level, log_dir=config['log_dir'], log_file=config['log_file'])
        logger.info("Logging re-configured with settings from config file.")

        # --- Instantiate Components ---
        try:
            logger.info("Initializing LiveSub components...")
            recognizer = build_recognizer(config)
            translator = build_translator(config)
            generator = build_generator(config, recognizer, translator)
            logger.info("Components initialized successfully.")
        except (LiveSubError, ValueError) as e:
            logger.critical(f"Failed to initialize LiveSub components: {e}")
            sys.exit(1)
        except Exception as e:
            logger.critical(f"An unexpected error occurred during component initialization: {e}", exc_info=True)
            sys.exit(1)

        def _handle_signal(signum, frame):
            logger.warning(f"Received signal {signum}. Stopping after the current cycle.")
            generator.stop()

        signal.signal(signal.SIGINT, _handle_signal)
        signal.signal(signal.SIGTERM, _handle_signal)

        # --- Run Poll Loop ---
        try:
            generator.run(max_cycles=args.max_cycles)
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            sys.exit(2)
        sys.exit(0)

def main() -> None:
    CLIHandler().run()
