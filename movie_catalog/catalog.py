"""
Catalog module.
Holds the loaded movies and answers search and filter queries over them.
"""

from typing import FrozenSet, Optional, Sequence, Tuple  # type annotations for clarity

# Import project modules for data structures and components
from .models import Movie, MovieQuery, MPAA_RATINGS  # core data classes
from .data_loader import Source, load_catalog_records  # one-shot loading
from .filters import ScoreField, search_titles, filter_by_rating, filter_by_genre, filter_by_range  # narrowing steps

# Import loguru for console logging
from loguru import logger  # simple structured logger


class MovieCatalog:
	"""
	Read-only collection of movies plus the genre facet derived from it.
	Build one at startup and hand it to whoever needs to query movies;
	nothing in here mutates after construction.
	"""

	# Filters are pure functions; exposed here so callers only need the catalog
	filter_by_rating = staticmethod(filter_by_rating)
	filter_by_genre = staticmethod(filter_by_genre)
	filter_by_range = staticmethod(filter_by_range)

	def __init__(self, movies: Sequence[Movie]):
		# Freeze the sequence so no caller can append/remove through all()
		self._movies: Tuple[Movie, ...] = tuple(movies)  # load order preserved
		# Distinct non-null genres, computed once
		genres = set()  # accumulator
		for m in self._movies:  # iterate dataset
			if m.major_genre is not None:  # absent genre contributes nothing
				genres.add(m.major_genre)
		self._genres: FrozenSet[str] = frozenset(genres)
		logger.info(f"[Catalog] Ready with {len(self._movies)} movies and {len(self._genres)} genres")

	@classmethod
	def load(cls, source: Source) -> 'MovieCatalog':
		"""Read every movie from `source` and build the catalog. Raises LoadError."""
		return cls(load_catalog_records(source))

	def __len__(self) -> int:
		return len(self._movies)

	def all(self) -> Tuple[Movie, ...]:
		"""Every movie, in load order."""
		return self._movies

	def search(self, terms: Optional[str] = None) -> Sequence[Movie]:
		"""Movies whose title contains `terms` (case-insensitive); None returns all()."""
		return search_titles(self._movies, terms)

	def genres(self) -> FrozenSet[str]:
		"""Distinct major genres present in the catalog."""
		return self._genres

	@staticmethod
	def known_ratings() -> Tuple[str, ...]:
		"""The fixed MPAA rating list, whatever the data contains."""
		return MPAA_RATINGS

	def query(self, query: MovieQuery) -> Sequence[Movie]:
		"""Search, then narrow by rating, genre, IMDB and Rotten Tomatoes ranges."""
		logger.debug(f"[Catalog] Query: {query}")
		results = self.search(query.terms)
		results = filter_by_rating(results, query.ratings)
		results = filter_by_genre(results, query.genres)
		results = filter_by_range(results, ScoreField.IMDB, query.imdb_min, query.imdb_max)
		results = filter_by_range(results, ScoreField.ROTTEN_TOMATOES, query.rotten_min, query.rotten_max)
		logger.debug(f"[Catalog] Query matched {len(results)} of {len(self._movies)} movies")
		return results


def load_catalog(source: Source) -> MovieCatalog:
	"""Build a catalog from a data file path or text stream. Raises LoadError."""
	return MovieCatalog.load(source)
