"""Benchmark runner to orchestrate the execution of benchmarks."""
from pathlib import Path
from typing import Optional, Sequence, Union
import logging

from src.shared.config import BenchmarkSettings

from .batch_scheduler import BatchScheduler
from .call_strategy import CallStrategy
from .constants import BenchmarkConstants
from .corpus_sampler import CorpusSampler
from .dataset_manager import DatasetManager
from .exceptions import ConfigurationError
from .inference_client import InferenceClient
from .latency_analyzer import LatencyAnalyzer
from .models import TokenizedPrompt
from .timing_collector import TimingCollector
from .tokenizer import PromptTokenizer
from .worker_pool import WorkerPool


logger = logging.getLogger(__name__)


class BenchmarkRunner:
    """Orchestrates sampling, dispatch and report writing for one benchmark run."""

    def __init__(self, settings: BenchmarkSettings, call_strategy: Optional[CallStrategy] = None,
                 report_path: Union[Path, str] = BenchmarkConstants.REPORT_FILE_NAME,
                 balanced_batches: bool = False):
        self.settings = settings
        self.call_strategy = call_strategy or CallStrategy.from_settings(settings)
        self.report_path = Path(report_path)
        self.balanced_batches = balanced_batches
        self.timing_collector = TimingCollector()
        self.sampler = CorpusSampler(BenchmarkConstants.SEED)
        self.inference_client = InferenceClient(settings, self.call_strategy, self.timing_collector)
        self.worker_pool = WorkerPool(self.inference_client, settings.threads, settings.delay_ms)

    def check_sample_limit(self, prompts: Sequence[TokenizedPrompt]) -> None:
        """
        Reject a sample limit the corpus cannot satisfy.

        Raises:
            ConfigurationError: If ``sample_limit`` exceeds the number of prompts.
        """
        limit = self.settings.sample_limit
        if limit is not None and limit > len(prompts):
            raise ConfigurationError(
                f"sample_limit {limit} is larger than the corpus ({len(prompts)} prompts)",
                config_key="sample_limit",
            )

    def run(self, prompts: Sequence[TokenizedPrompt]) -> str:
        """
        Run the benchmark over tokenized prompts.

        The report is written even when the run is aborted, and then holds
        every request completed before the failure.

        Args:
            prompts: Tokenized corpus in dataset order.

        Returns:
            The report text.

        Raises:
            ConfigurationError: If the sample limit exceeds the corpus; nothing is dispatched.
            TransportError: If the endpoint became unreachable during the run.
        """
        try:
            self.check_sample_limit(prompts)
        except ConfigurationError:
            self.call_strategy.close()
            raise

        report = ""
        try:
            sampled = self.sampler.sample(prompts, self.settings.sample_limit)
            batches = BatchScheduler.partition(sampled, self.settings.threads, balanced=self.balanced_batches)
            logger.info(f"Dispatching {len(sampled)} prompts in {len(batches)} batches "
                        f"on {self.settings.threads} threads")
            self.worker_pool.run(batches)
            logger.info("Benchmark completed successfully!")
        except Exception as e:
            logger.error(f"Benchmark failed: {e}")
            raise
        finally:
            report = self.write_report()
            self.call_strategy.close()
        return report

    def run_from_files(self) -> str:
        """
        Load the dataset and tokenizer named in the settings, then run.

        Raises:
            ConfigurationError: If the dataset or tokenizer path is not configured.
            DatasetLoadError: If the dataset cannot be read.
        """
        try:
            if self.settings.dataset_path is None:
                raise ConfigurationError("dataset_path is required", config_key="dataset_path")
            if self.settings.tokenizer_path is None:
                raise ConfigurationError("tokenizer_path is required", config_key="tokenizer_path")

            texts = DatasetManager().prepare_prompts(self.settings.dataset_path)
            prompts = PromptTokenizer(self.settings.tokenizer_path).encode_all(texts)
        except Exception:
            self.call_strategy.close()
            raise

        logger.info(f"Parsed prompts number: {len(prompts)}")
        return self.run(prompts)

    def render_report(self) -> str:
        return (BenchmarkConstants.REPORT_INFO_PREFIX + str(self.settings) + "\n\n"
                + self.timing_collector.render_report())

    def write_report(self) -> str:
        """Render the report, log it and save it to the report path."""
        report = self.render_report()
        logger.info(f"Report: \n\n {report}")

        self.report_path.write_text(report)
        logger.info(f"Report saved to: {self.report_path.absolute()}")

        summary = LatencyAnalyzer.compute(self.timing_collector.records())
        logger.info(
            f"Recorded {summary.count} requests ({self.timing_collector.skipped} skipped, "
            f"{self.timing_collector.failed} failed): p50={summary.p50:.0f}ms p90={summary.p90:.0f}ms "
            f"p95={summary.p95:.0f}ms mean={summary.mean:.1f}ms per ctx token={summary.mean_per_token:.2f}ms"
        )
        return report
