"""Prover configuration.

:class:`ProverConfig` holds the few knobs the generator and falseness engine
read.  :func:`load_config` reads them from a YAML file such as::

	prover:
	  max_rows: 200000
	  stop_at_first_false: true
	  require_closure: true
"""

import dataclasses
import logging
import os
import typing

import yaml

import ringproof.constants


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ProverConfig:

	"""
	Settings shared by one proving run.

	Attributes:
		max_rows: Safety bound on the rows a generator may emit before it
			gives up and raises ``MalformedTouch``.
		stop_at_first_false: Stop pulling rows as soon as one is false.
			Used for exploratory runs that go "until truth breaks".
		require_closure: A touch that does not return to its start row is
			reported as not true even if no row repeats.
	"""

	max_rows: int = ringproof.constants.DEFAULT_MAX_ROWS
	stop_at_first_false: bool = False
	require_closure: bool = True

	def __post_init__ (self) -> None:

		if self.max_rows < 1:
			raise ValueError("max_rows must be positive")


def config_from_dict (data: typing.Optional[typing.Mapping[str, typing.Any]]) -> ProverConfig:

	"""
	Build a :class:`ProverConfig` from the ``prover`` section of a mapping.

	Raises:
		ValueError: If the section contains unknown keys.
	"""

	if not data:
		return ProverConfig()

	section = data.get("prover", {}) or {}
	known = {field.name for field in dataclasses.fields(ProverConfig)}
	unknown = sorted(set(section) - known)

	if unknown:
		raise ValueError(f"Unknown prover settings: {', '.join(unknown)}. Known settings: {', '.join(sorted(known))}")

	return ProverConfig(**section)


def load_config (config_path: str = "ringproof.yaml") -> ProverConfig:

	"""
	Load configuration from a YAML file, falling back to defaults if it is missing.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return ProverConfig()

	with open(config_path, "r") as f:
		data = yaml.safe_load(f)

	config = config_from_dict(data)
	logger.debug(f"Loaded {config} from {config_path}")

	return config
