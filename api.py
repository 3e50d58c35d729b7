"""
FastAPI server exposing the movie catalog.
Endpoints:
- GET /health: basic health check
- GET /movies?q=...&rating=PG&genre=Drama&imdb_min=7: filtered movies in catalog order
- GET /genres: genres present in the catalog
- GET /ratings: the fixed MPAA rating list

Startup loads the catalog once from MOVIES_PATH (default data/movies.json).
A missing or corrupt data file aborts startup.
"""

# Import standard libraries for env-based settings and timing
import os  # environment-based settings
import sys  # stderr sink for loguru
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import Depends, FastAPI, HTTPException, Query, Request  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for loading and querying
from movie_catalog.catalog import MovieCatalog  # read-only catalog
from movie_catalog.models import Movie, MovieQuery  # records and query criteria

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Settings, overridable through the environment
MOVIES_PATH = os.environ.get('MOVIES_PATH', 'data/movies.json')  # data file to load
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')  # loguru sink level

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Catalog API", version="1.0.0")  # web app
app.state.catalog = None  # filled once at startup
app.state.startup_seconds = 0.0  # measures how long startup took


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	title: Optional[str] = None  # human-readable title
	major_genre: Optional[str] = None  # genre label
	mpaa_rating: Optional[str] = None  # content rating
	imdb_rating: Optional[float] = None  # IMDB score
	rotten_tomatoes_rating: Optional[float] = None  # Rotten Tomatoes score
	director: Optional[str] = None  # director name if present
	release_date: Optional[str] = None  # release date text
	running_time: Optional[float] = None  # minutes

	@classmethod
	def from_movie(cls, m: Movie) -> 'MovieOut':
		return cls(
			title=m.title,
			major_genre=m.major_genre,
			mpaa_rating=m.mpaa_rating,
			imdb_rating=m.imdb_rating,
			rotten_tomatoes_rating=m.rotten_tomatoes_rating,
			director=m.director,
			release_date=m.release_date,
			running_time=m.running_time,
		)


# Pydantic model for the complete listing payload
class MoviesResponse(BaseModel):
	count: int  # number of movies returned
	elapsed_ms: float  # server-side query time in ms
	results: List[MovieOut]  # movies in catalog order


def configure_logging(level: str = LOG_LEVEL, sink=sys.stderr) -> int:
	"""Replace loguru's default DEBUG sink with one at `level`; returns the sink id."""
	logger.remove()  # drop existing sinks
	return logger.add(sink, level=level)


# FastAPI startup hook to load the catalog once
@app.on_event("startup")
async def startup_event():
	"""Load the catalog; LoadError propagates and stops the server."""
	configure_logging(LOG_LEVEL)  # honour LOG_LEVEL once the server starts
	if app.state.catalog is not None:  # already provided (e.g., by tests)
		return
	start = time.time()  # start timer for startup latency
	logger.info(f"[API] Startup: loading catalog from {MOVIES_PATH}...")  # log intent
	app.state.catalog = MovieCatalog.load(MOVIES_PATH)  # fatal on failure
	app.state.startup_seconds = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {app.state.startup_seconds:.2f}s.")  # summary log


def get_catalog(request: Request) -> MovieCatalog:
	"""Dependency handing the loaded catalog to route handlers."""
	catalog = request.app.state.catalog
	if catalog is None:  # startup has not run or failed
		logger.warning("[API] Request received but catalog not loaded")  # guard log
		raise HTTPException(status_code=503, detail="Catalog not loaded")
	return catalog


# Simple health endpoint for readiness checks
@app.get("/health")
async def health(request: Request):
	"""Return minimal health info for liveness/readiness probes."""
	catalog = request.app.state.catalog
	return {
		"status": "ok",  # constant indicator
		"catalog_ready": catalog is not None,  # True if catalog loaded
		"movies": len(catalog) if catalog is not None else 0,  # dataset size
		"startup_seconds": round(request.app.state.startup_seconds, 2)  # startup latency
	}


# Main listing endpoint combining search and every filter
@app.get("/movies", response_model=MoviesResponse)
async def list_movies(
	q: Optional[str] = Query(None, description="Case-insensitive title substring"),
	rating: Optional[List[str]] = Query(None, description="MPAA ratings to include"),
	genre: Optional[List[str]] = Query(None, description="Major genres to include"),
	imdb_min: Optional[float] = None,
	imdb_max: Optional[float] = None,
	rotten_min: Optional[float] = None,
	rotten_max: Optional[float] = None,
	catalog: MovieCatalog = Depends(get_catalog),
):
	"""Search titles and apply filters; omitted parameters do not filter."""
	query = MovieQuery(
		terms=q,
		ratings=frozenset(rating) if rating else None,
		genres=frozenset(genre) if genre else None,
		imdb_min=imdb_min,
		imdb_max=imdb_max,
		rotten_min=rotten_min,
		rotten_max=rotten_max,
	)

	# Time the query for latency insight
	start = time.time()  # start timer
	logger.debug(f"[API] /movies {query}")  # debug log of input
	results = catalog.query(query)  # run search + filters
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /movies served {len(results)} results in {elapsed_ms:.2f} ms")  # summary

	return MoviesResponse(
		count=len(results),
		elapsed_ms=round(elapsed_ms, 2),
		results=[MovieOut.from_movie(m) for m in results],
	)


@app.get("/genres", response_model=List[str])
async def list_genres(catalog: MovieCatalog = Depends(get_catalog)):
	"""Genres present in the catalog, alphabetized for display."""
	return sorted(catalog.genres())


@app.get("/ratings", response_model=List[str])
async def list_ratings():
	"""The fixed MPAA rating list in display order."""
	return list(MovieCatalog.known_ratings())
