"""
Filter module.
Pure narrowing functions over a sequence of movies. Each one returns its input
unchanged when given no criterion, and otherwise a new list in input order.
Filters never depend on each other, so they can be chained in any order.
"""

from enum import Enum  # names the numeric fields a range filter can inspect
from typing import Callable, Iterable, Optional, Sequence, List  # type annotations

from loguru import logger  # simple structured logger

from .models import Movie  # core data class


class ScoreField(Enum):
	"""Numeric movie fields that support range filtering."""
	IMDB = 'imdb_rating'
	ROTTEN_TOMATOES = 'rotten_tomatoes_rating'

	@property
	def accessor(self) -> Callable[[Movie], Optional[float]]:
		"""Function reading this field from a movie."""
		attr = self.value
		return lambda movie: getattr(movie, attr)


def search_titles(movies: Sequence[Movie], terms: Optional[str]) -> Sequence[Movie]:
	"""
	Keep movies whose title contains `terms`, ignoring case.
	None means no search; "" matches every movie that has a title.
	"""
	if terms is None:  # no search requested
		return movies
	needle = terms.lower()  # per-character lowering, independent of locale
	results = [m for m in movies if m.title is not None and needle in m.title.lower()]
	logger.debug(f"[Filters] search '{terms}' kept {len(results)} of {len(movies)}")
	return results


def _filter_by_membership(movies: Sequence[Movie], wanted: Optional[Iterable[str]], attr: str) -> Sequence[Movie]:
	"""Shared body of the categorical filters."""
	if not wanted:  # None or empty selector: pass-through
		return movies
	accepted = set(wanted)  # O(1) membership
	results = []
	for movie in movies:
		value = getattr(movie, attr)
		if value is not None and value in accepted:
			results.append(movie)
	logger.debug(f"[Filters] {attr} in {len(accepted)} values kept {len(results)} of {len(movies)}")
	return results


def filter_by_rating(movies: Sequence[Movie], ratings: Optional[Iterable[str]]) -> Sequence[Movie]:
	"""Keep movies whose MPAA rating is one of `ratings`."""
	return _filter_by_membership(movies, ratings, 'mpaa_rating')


def filter_by_genre(movies: Sequence[Movie], genres: Optional[Iterable[str]]) -> Sequence[Movie]:
	"""Keep movies whose major genre is one of `genres`."""
	return _filter_by_membership(movies, genres, 'major_genre')


def filter_by_range(
	movies: Sequence[Movie],
	field: ScoreField,
	min_score: Optional[float] = None,
	max_score: Optional[float] = None,
) -> Sequence[Movie]:
	"""
	Keep movies whose `field` lies within [min_score, max_score].
	Either bound may be omitted; both ends are inclusive. Movies without a
	value for the field are dropped whenever a bound is given. An inverted
	range (min_score > max_score) simply matches nothing.
	"""
	if min_score is None and max_score is None:  # no bounds: pass-through
		return movies

	read = field.accessor  # picks imdb_rating or rotten_tomatoes_rating
	results: List[Movie] = []
	for movie in movies:
		value = read(movie)
		if value is None:  # absent score never satisfies a bound
			continue
		# Keep only on a successful comparison so a NaN bound matches nothing
		if (min_score is None or value >= min_score) and (max_score is None or value <= max_score):
			results.append(movie)

	logger.debug(
		f"[Filters] {field.value} in [{min_score}, {max_score}] kept {len(results)} of {len(movies)}"
	)
	return results
