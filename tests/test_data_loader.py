"""
Unit tests for DataLoader: sample file, key styles, JSON Lines, and load failures.
Run: python tests/test_data_loader.py
"""

import codecs
import io
import tempfile
from pathlib import Path

from movie_catalog.data_loader import DataLoader, LoadError

ROOT = Path(__file__).resolve().parents[1]
SAMPLE = ROOT / 'data' / 'movies.json'


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def assert_load_error(text, msg):
	try:
		DataLoader().load_movies(io.StringIO(text))
	except LoadError:
		return
	raise AssertionError(msg)


def test_sample_file():
	movies = DataLoader().load_movies(SAMPLE)
	assert_equal(len(movies), 10, "sample movie count")

	first = movies[0]
	assert_equal(first.title, "The Matrix", "title kept with original casing")
	assert_equal(first.major_genre, "Action", "'Major Genre' key")
	assert_equal(first.mpaa_rating, "R", "'MPAA Rating' key")
	assert_equal(first.imdb_rating, 8.7, "'IMDB Rating' key")
	assert_equal(first.rotten_tomatoes_rating, 86.0, "'Rotten Tomatoes Rating' as float")
	assert_equal(first.running_time, 136.0, "'Running Time min' key")
	assert_equal(first.imdb_votes, 700271, "'IMDB Votes' key")
	assert_equal(first.director, "Andy Wachowski", "director")

	# Nulls stay absent
	assert_true(movies[-1].title is None, "null title stays None")
	assert_true(movies[7].major_genre is None, "null genre stays None")
	assert_true(movies[8].imdb_rating is None, "null score stays None")


def test_key_styles():
	text = '[{"majorGenre": "Drama", "MPAARating": "PG", "imdb_rating": "7.1", "RottenTomatoesRating": 55, "title": "A", "unknown": 1}]'
	movies = DataLoader().load_movies(io.StringIO(text))
	m = movies[0]
	assert_equal(m.major_genre, "Drama", "camelCase key")
	assert_equal(m.mpaa_rating, "PG", "PascalCase key")
	assert_equal(m.imdb_rating, 7.1, "snake_case key with numeric text")
	assert_equal(m.rotten_tomatoes_rating, 55.0, "int promoted to float")
	assert_equal(m.title, "A", "lowercase key")


def test_json_lines():
	text = '{"Title": "One", "IMDB Rating": 6}\n\n{"Title": "Two", "IMDB Rating": null}\n'
	movies = DataLoader().load_movies(io.StringIO(text))
	assert_equal([m.title for m in movies], ["One", "Two"], "JSON Lines order preserved")
	assert_true(movies[1].imdb_rating is None, "null in JSON Lines")


def test_empty_array_is_empty_catalog():
	assert_equal(DataLoader().load_movies(io.StringIO("[]")), [], "empty array")


def test_load_errors():
	try:
		DataLoader().load_movies(ROOT / 'data' / 'does-not-exist.json')
		raise AssertionError("missing file should raise LoadError")
	except LoadError:
		pass

	assert_load_error("", "empty source")
	assert_load_error("[{\"Title\": \"x\"", "truncated JSON array")
	assert_load_error("{\"Title\": \"x\"}\nnot json\n", "bad JSON line")
	assert_load_error("[1, 2]", "records must be objects")
	assert_load_error("[{\"IMDB Rating\": \"great\"}]", "non-numeric score")
	assert_load_error("[{\"Title\": [\"x\"]}]", "non-text title")
	assert_load_error("[{\"MPAA Rating\": true}]", "boolean field")


def test_non_finite_scores_rejected():
	assert_load_error("[{\"Title\": \"Ghost\", \"IMDB Rating\": NaN}]", "JSON NaN literal")
	assert_load_error("[{\"Title\": \"Str\", \"IMDB Rating\": \"nan\"}]", "nan as text")
	assert_load_error("[{\"Title\": \"Big\", \"Rotten Tomatoes Rating\": \"inf\"}]", "infinity as text")
	assert_load_error("{\"Title\": \"Line\", \"IMDB Rating\": Infinity}\n", "Infinity in JSON Lines")


def test_byte_order_mark():
	body = "[{\"Title\": \"Heat\"}]"
	movies = DataLoader().load_movies(io.StringIO("\ufeff" + body))
	assert_equal([m.title for m in movies], ["Heat"], "BOM in stream")

	with tempfile.TemporaryDirectory() as folder:
		path = Path(folder) / "bom.json"
		path.write_bytes(codecs.BOM_UTF8 + body.encode("utf-8"))
		movies = DataLoader().load_movies(path)
	assert_equal([m.title for m in movies], ["Heat"], "BOM in file")


def test_wrapper_document_rejected():
	assert_load_error("{\"movies\": [{\"Title\": \"Heat\"}]}", "object wrapping the movie list")
	assert_load_error("[{\"movies\": [{\"Title\": \"Heat\"}]}]", "array of wrappers")
	assert_load_error("[{}]", "record without movie fields")
	movies = DataLoader().load_movies(io.StringIO("[{\"Title\": null}]"))
	assert_true(movies[0].title is None, "record with only null fields is still a movie")


def test_load_error_chains_cause():
	try:
		DataLoader().load_movies(io.StringIO("[oops]"))
	except LoadError as e:
		assert_true(e.__cause__ is not None, "original exception chained")
		return
	raise AssertionError("invalid JSON should raise LoadError")


def main():
	print("Running DataLoader tests...")
	test_sample_file()
	print(" - sample file ok")
	test_key_styles()
	print(" - key styles ok")
	test_json_lines()
	print(" - JSON Lines ok")
	test_empty_array_is_empty_catalog()
	test_load_errors()
	test_load_error_chains_cause()
	test_non_finite_scores_rejected()
	test_byte_order_mark()
	test_wrapper_document_rejected()
	print(" - load errors ok")
	print("All DataLoader tests passed!")


if __name__ == '__main__':
	main()
