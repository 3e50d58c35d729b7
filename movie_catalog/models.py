"""
Data models for the Movie Catalog.
Defines the core data structures used throughout the system.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import FrozenSet, Optional  # optional values and immutable sets


# Fixed list of content ratings offered to filter UIs (not derived from data)
MPAA_RATINGS = ("G", "PG", "PG-13", "R", "NC-17")


@dataclass(frozen=True)
class Movie:
	"""
	Represents a single movie exactly as it was loaded from the data file.
	Every field is optional: None means the value was absent in the source.
	"""
	title: Optional[str] = None  # display title, original casing
	major_genre: Optional[str] = None  # single genre label (e.g., "Action")
	mpaa_rating: Optional[str] = None  # content rating, normally one of MPAA_RATINGS
	imdb_rating: Optional[float] = None  # IMDB user score on a 0-10 scale
	rotten_tomatoes_rating: Optional[float] = None  # Rotten Tomatoes score on a 0-100 scale
	director: Optional[str] = None  # director's name
	release_date: Optional[str] = None  # release date text as published (e.g., "Mar 31 1999")
	running_time: Optional[float] = None  # length in minutes
	distributor: Optional[str] = None  # distributing studio
	source: Optional[str] = None  # origin of the story (e.g., "Original Screenplay")
	creative_type: Optional[str] = None  # e.g., "Science Fiction", "Contemporary Fiction"
	us_gross: Optional[float] = None  # domestic box office in dollars
	worldwide_gross: Optional[float] = None  # worldwide box office in dollars
	us_dvd_sales: Optional[float] = None  # domestic DVD sales in dollars
	production_budget: Optional[float] = None  # production budget in dollars
	imdb_votes: Optional[int] = None  # number of IMDB votes behind imdb_rating


@dataclass(frozen=True)
class MovieQuery:
	"""
	Everything a caller may ask of the catalog in one go.
	Unset criteria (None or empty) do not narrow the result.
	"""
	terms: Optional[str] = None  # title substring; None means "no search"
	ratings: Optional[FrozenSet[str]] = None  # accepted MPAA ratings
	genres: Optional[FrozenSet[str]] = None  # accepted major genres
	imdb_min: Optional[float] = None  # lower IMDB bound (inclusive)
	imdb_max: Optional[float] = None  # upper IMDB bound (inclusive)
	rotten_min: Optional[float] = None  # lower Rotten Tomatoes bound (inclusive)
	rotten_max: Optional[float] = None  # upper Rotten Tomatoes bound (inclusive)

	def is_empty(self) -> bool:
		"""True when no criterion would narrow the catalog."""
		bounds = (self.imdb_min, self.imdb_max, self.rotten_min, self.rotten_max)
		return (
			self.terms is None
			and not self.ratings
			and not self.genres
			and all(b is None for b in bounds)
		)
