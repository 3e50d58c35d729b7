"""
Data loading module.
Reads the movie data file (JSON array or JSON Lines) into Movie records in one pass.
Any problem with the source is fatal: no partial catalog is ever produced.
"""

# Standard libs for JSON parsing, regex, typing, and paths
import json  # decode the data file
import math  # reject non-finite scores
import re  # normalize record keys
from typing import Any, Dict, List, Union, TextIO  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our Movie data class used across the project
from .models import Movie  # structured movie record

# Console logging
from loguru import logger  # console logger


class LoadError(Exception):
	"""Raised when the movie source is missing, unreadable, or not parseable into movies."""


# Anything load() can read from: a filesystem path or an open text stream
Source = Union[str, Path, TextIO]


class DataLoader:
	"""
	Handles loading movie data and coercing each record into a Movie.
	"""

	# Normalized source key → Movie attribute. Keys are compared lowercase with
	# spaces, underscores and hyphens removed, so "Major Genre" == "majorGenre".
	FIELD_ALIASES = {
		'title': 'title',
		'majorgenre': 'major_genre',
		'mpaarating': 'mpaa_rating',
		'imdbrating': 'imdb_rating',
		'rottentomatoesrating': 'rotten_tomatoes_rating',
		'director': 'director',
		'releasedate': 'release_date',
		'runningtime': 'running_time',
		'runningtimemin': 'running_time',
		'distributor': 'distributor',
		'source': 'source',
		'creativetype': 'creative_type',
		'usgross': 'us_gross',
		'worldwidegross': 'worldwide_gross',
		'usdvdsales': 'us_dvd_sales',
		'productionbudget': 'production_budget',
		'imdbvotes': 'imdb_votes',
	}

	TEXT_FIELDS = {'title', 'major_genre', 'mpaa_rating', 'director', 'release_date', 'distributor', 'source', 'creative_type'}
	FLOAT_FIELDS = {'imdb_rating', 'rotten_tomatoes_rating', 'running_time', 'us_gross', 'worldwide_gross', 'us_dvd_sales', 'production_budget'}
	INT_FIELDS = {'imdb_votes'}

	_KEY_NOISE = re.compile(r'[\s_\-()]+')  # characters ignored when matching keys

	def __init__(self):
		"""Initialize the data loader and expose the alias mapping."""
		self.field_aliases = self.FIELD_ALIASES  # store mapping for reuse

	def load_movies(self, source: Source) -> List[Movie]:
		"""
		Load every movie from a path or text stream.
		Accepts a JSON array of objects or JSON Lines (one object per line).
		Raises LoadError on any failure.
		"""
		name = self._describe(source)  # label used in log and error messages
		logger.info(f"[DataLoader] Loading movies from {name}...")  # log action

		text = self._read_source(source, name)  # whole document as text
		records = self._decode(text, name)  # list of raw dicts

		movies = []  # accumulator for parsed Movie objects
		for record_num, data in enumerate(records, 1):  # keep position for diagnostics
			if not isinstance(data, dict):  # every record must be a JSON object
				raise LoadError(f"Record {record_num} in {name} is not an object: {type(data).__name__}")
			if not any(self._normalize_key(k) in self.field_aliases for k in data):  # e.g. a {"movies": [...]} wrapper
				raise LoadError(f"Record {record_num} in {name} has no movie fields: {sorted(map(str, data))[:5]}")
			try:
				movies.append(self._parse_movie_data(data))  # convert dict -> Movie
			except (TypeError, ValueError, OverflowError) as e:
				raise LoadError(f"Record {record_num} in {name} has an invalid field: {e}") from e

		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movies.")  # summary
		return movies  # return list

	def _describe(self, source: Source) -> str:
		"""Human-readable name of the source."""
		if isinstance(source, (str, Path)):
			return str(source)
		return getattr(source, 'name', '<stream>')  # open files know their name

	def _read_source(self, source: Source, name: str) -> str:
		"""Read the full document; missing or unreadable sources become LoadError."""
		if isinstance(source, (str, Path)):
			filepath = Path(source)  # normalize path
			# Validate the file presence early to give clear error messages
			if not filepath.exists():
				logger.error(f"[DataLoader] Movie data file not found: {filepath}")
				raise LoadError(f"Movie data file not found: {filepath}")
			try:
				return filepath.read_text(encoding='utf-8-sig')  # drops a leading byte-order mark
			except (OSError, UnicodeDecodeError) as e:
				raise LoadError(f"Could not read {name}: {e}") from e
		try:
			text = source.read()  # stream already opened by the caller
			return text.lstrip('\ufeff')  # byte-order mark left by some editors
		except (OSError, UnicodeDecodeError) as e:
			raise LoadError(f"Could not read {name}: {e}") from e

	def _decode(self, text: str, name: str) -> List[Any]:
		"""Turn document text into a list of raw records."""
		stripped = text.strip()
		if not stripped:
			raise LoadError(f"Movie data source {name} is empty")

		if stripped.startswith('['):  # JSON array document
			try:
				records = json.loads(stripped)
			except json.JSONDecodeError as e:
				raise LoadError(f"Invalid JSON in {name}: {e}") from e
			if not isinstance(records, list):
				raise LoadError(f"Expected a JSON array of movies in {name}")
			return records

		# Otherwise JSON Lines: one object per non-blank line
		records = []
		for line_num, line in enumerate(stripped.splitlines(), 1):
			if not line.strip():  # blank lines carry nothing
				continue
			try:
				records.append(json.loads(line))  # parse JSON object per line
			except json.JSONDecodeError as e:
				raise LoadError(f"Invalid JSON at line {line_num} of {name}: {e}") from e
		return records

	def _parse_movie_data(self, data: Dict) -> Movie:
		"""
		Convert a raw dictionary (from file) into a Movie.
		Missing keys and JSON nulls both become None.
		"""
		fields = {}  # Movie keyword arguments
		for key, value in data.items():
			attr = self.field_aliases.get(self._normalize_key(key))  # known field?
			if attr is None:  # unknown keys are ignored
				continue
			fields[attr] = self._coerce(attr, value)
		return Movie(**fields)

	def _normalize_key(self, key: str) -> str:
		"""Lowercase and strip separators so differently styled keys compare equal."""
		return self._KEY_NOISE.sub('', str(key)).lower()

	def _coerce(self, attr: str, value: Any):
		"""Convert a raw JSON value to the type of the Movie attribute."""
		if value is None:
			return None
		if isinstance(value, bool):  # JSON true/false never fits a movie field
			raise TypeError(f"{attr} cannot be a boolean")

		if attr in self.TEXT_FIELDS:
			if isinstance(value, str):
				return value
			if isinstance(value, (int, float)):  # e.g., a numeric title like 1776
				return str(value)
			raise TypeError(f"{attr} must be text, got {type(value).__name__}")

		if attr in self.FLOAT_FIELDS:
			if isinstance(value, (int, float)):
				return self._finite(attr, float(value))
			if isinstance(value, str):
				if not value.strip():  # blank cell means unknown
					return None
				return self._finite(attr, float(value))  # ValueError on junk
			raise TypeError(f"{attr} must be numeric, got {type(value).__name__}")

		if attr in self.INT_FIELDS:
			if isinstance(value, int):
				return value
			if isinstance(value, float) and value.is_integer():
				return int(value)
			if isinstance(value, str):
				if not value.strip():
					return None
				return int(value.replace(',', ''))  # tolerate "1,234"
			raise TypeError(f"{attr} must be an integer, got {value!r}")

		return value

	def _finite(self, attr: str, number: float) -> float:
		"""NaN and infinities are not scores; absence is spelled null."""
		if not math.isfinite(number):
			raise ValueError(f"{attr} must be a finite number, got {number!r}")
		return number


def load_catalog_records(source: Source) -> List[Movie]:
	"""Shortcut used by the catalog: load with a default DataLoader."""
	return DataLoader().load_movies(source)
