"""Example components referenced by the configuration documents used in tests."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from wirework.coercion import Float32, Int32
from wirework.config_base import ConfigBase
from wirework.domain import SettingsRecord
from wirework.lifecycle import InitializableProblemHandler, must_not_be_empty


class Fetcher(ABC):
    @abstractmethod
    def fetch(self, key: str) -> str:
        ...


class S3Fetcher(Fetcher):
    def __init__(self):
        self.region: Optional[str] = None
        self.bucket: Optional[str] = None
        self.profile: Optional[str] = None
        self.extract_user_metadata = True
        self.spool_to_temp = True
        self.max_connections = 50
        self.timeout_millis = 30_000
        self.throttle = 1.0
        self.ratio = 0.5
        self.prefixes: list[str] = []
        self.headers: dict[str, str] = {}
        self.initialized_with: Optional[dict] = None
        self.problem_handler: Optional[InitializableProblemHandler] = None

    def fetch(self, key: str) -> str:
        return f"s3://{self.bucket}/{key}"

    def set_region(self, region: str):
        self.region = region

    def set_bucket(self, bucket: str):
        self.bucket = bucket

    def set_profile(self, profile: str):
        self.profile = profile

    def set_extract_user_metadata(self, extract_user_metadata: bool):
        self.extract_user_metadata = extract_user_metadata

    def set_spool_to_temp(self, spool_to_temp: bool):
        self.spool_to_temp = spool_to_temp

    def set_max_connections(self, max_connections: Int32):
        self.max_connections = max_connections

    def set_timeout_millis(self, timeout_millis: int):
        self.timeout_millis = timeout_millis

    def set_throttle(self, throttle: float):
        self.throttle = throttle

    def set_ratio(self, ratio: Float32):
        self.ratio = ratio

    def set_prefixes(self, prefixes: list[str]):
        self.prefixes = prefixes

    def set_headers(self, headers: dict[str, str]):
        self.headers = headers

    def initialize(self, params: dict[str, Any]) -> None:
        self.initialized_with = params

    def check_initialization(self, problem_handler: InitializableProblemHandler) -> None:
        self.problem_handler = problem_handler
        must_not_be_empty("bucket", self.bucket)
        must_not_be_empty("region", self.region)
        must_not_be_empty("profile", self.profile)


class FileSystemFetcher(Fetcher):
    def __init__(self):
        self.base_path = ""
        self.extensions: list[str] = []

    def fetch(self, key: str) -> str:
        return f"{self.base_path}/{key}"

    def set_base_path(self, base_path: str):
        self.base_path = base_path

    def set_extensions(self, extensions: list[str]):
        self.extensions = extensions


class RejectingFetcher(FileSystemFetcher):
    """Fails its own validation whatever it is given."""

    def initialize(self, params: dict[str, Any]) -> None:
        pass

    def check_initialization(self, problem_handler: InitializableProblemHandler) -> None:
        problem_handler.handle_initializable_problem(type(self).__name__, "always rejected")


class NeedsArgumentFetcher(Fetcher):
    def __init__(self, base_path: str):
        self.base_path = base_path

    def fetch(self, key: str) -> str:
        return key


class ExplodingFetcher(Fetcher):
    def __init__(self):
        raise RuntimeError("cannot connect")

    def fetch(self, key: str) -> str:
        return key


class NotAFetcher:
    constructed = 0

    def __init__(self):
        NotAFetcher.constructed += 1


class MetadataFilter(ABC):
    @abstractmethod
    def filter(self, metadata: dict[str, str]) -> None:
        ...


class LowerCaseFilter(MetadataFilter):
    def __init__(self):
        self.field: Optional[str] = None

    def set_field(self, field: str):
        self.field = field

    def filter(self, metadata: dict[str, str]) -> None:
        if self.field in metadata:
            metadata[self.field] = metadata[self.field].lower()


class TrimFilter(MetadataFilter):
    def __init__(self):
        self.max_length = 0

    def set_max_length(self, max_length: Int32):
        self.max_length = max_length

    def filter(self, metadata: dict[str, str]) -> None:
        for key, value in metadata.items():
            metadata[key] = value[: self.max_length]


class CompositeMetadataFilter(MetadataFilter):
    def __init__(self, filters: list[MetadataFilter]):
        self.filters = filters
        self.name: Optional[str] = None
        self.raw_filters: Optional[list[str]] = None
        self.initialized = False

    def set_name(self, name: str):
        self.name = name

    def set_metadata_filter(self, filters: list[str]):
        self.raw_filters = filters

    def filter(self, metadata: dict[str, str]) -> None:
        for f in self.filters:
            f.filter(metadata)

    def initialize(self, params: dict[str, Any]) -> None:
        self.initialized = True

    def check_initialization(self, problem_handler: InitializableProblemHandler) -> None:
        pass


class NoArgumentCompositeFilter(MetadataFilter):
    def __init__(self):
        self.filters: list[MetadataFilter] = []

    def filter(self, metadata: dict[str, str]) -> None:
        pass


class FlexibleSetter:
    """Mutators exercising annotation handling."""

    def __init__(self):
        self.values: dict[str, Any] = {}

    def set_either(self, value: Union[int, str]):
        self.values["either"] = value

    def set_optional_count(self, value: Optional[int]):
        self.values["optional_count"] = value

    def set_anything(self, value):
        self.values["anything"] = value

    def set_level(self, value: int):
        if value < 0:
            raise ValueError("level must not be negative")
        self.values["level"] = value

    def set_pair(self, first: str, second: str):
        self.values["pair"] = (first, second)

    def set_numbers(self, value: list[int]):
        self.values["numbers"] = value

    def set_callback(self, value: Any = None, *, extra: bool = False):
        self.values["callback"] = value

    set_not_callable = "constant"


class PipelineConfig(ConfigBase):
    def __init__(self):
        self.num_clients = 1
        self.forked = False
        self.handled: Optional[SettingsRecord] = None

    def set_num_clients(self, num_clients: Int32):
        self.num_clients = num_clients

    def set_forked(self, forked: bool):
        self.forked = forked

    def handle_settings(self, settings: SettingsRecord):
        self.handled = settings


class CountingFilter(MetadataFilter):
    initialized = 0

    def filter(self, metadata: dict[str, str]) -> None:
        pass

    def initialize(self, params: dict[str, Any]) -> None:
        CountingFilter.initialized += 1

    def check_initialization(self, problem_handler: InitializableProblemHandler) -> None:
        pass
