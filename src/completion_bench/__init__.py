"""Completion latency benchmark package initialization."""
from .models import (
    TokenizedPrompt,
    InferenceRequest,
    CompletionResponse,
    CallResult,
    TimingRecord,
    LatencyResults,
    ReportData,
)
from .constants import BenchmarkConstants, FimTokens
from .exceptions import (
    BenchmarkError,
    ConfigurationError,
    ContextOverflowError,
    ProtocolError,
    TransportError,
    PromptAssemblyError,
    DatasetLoadError,
)
from .prompt_assembler import PromptAssembler
from .corpus_sampler import CorpusSampler
from .batch_scheduler import BatchScheduler
from .request_session_manager import RequestSessionManager
from .call_strategy import CallStrategy, RealCall, SimulatedCall
from .timing_collector import TimingCollector
from .inference_client import InferenceClient
from .latency_analyzer import LatencyAnalyzer
from .worker_pool import WorkerPool, ProgressCounter
from .dataset_manager import DatasetManager
from .tokenizer import PromptTokenizer
from .result_exporter import ResultExporter
from .visualization_generator import VisualizationGenerator
from .runner import BenchmarkRunner

__all__ = [
    'TokenizedPrompt',
    'InferenceRequest',
    'CompletionResponse',
    'CallResult',
    'TimingRecord',
    'LatencyResults',
    'ReportData',
    'BenchmarkConstants',
    'FimTokens',
    'BenchmarkError',
    'ConfigurationError',
    'ContextOverflowError',
    'ProtocolError',
    'TransportError',
    'PromptAssemblyError',
    'DatasetLoadError',
    'PromptAssembler',
    'CorpusSampler',
    'BatchScheduler',
    'RequestSessionManager',
    'CallStrategy',
    'RealCall',
    'SimulatedCall',
    'TimingCollector',
    'InferenceClient',
    'LatencyAnalyzer',
    'WorkerPool',
    'ProgressCounter',
    'DatasetManager',
    'PromptTokenizer',
    'ResultExporter',
    'VisualizationGenerator',
    'BenchmarkRunner'
]
