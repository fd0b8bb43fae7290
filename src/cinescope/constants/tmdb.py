SORT_OPTIONS = {
    "popularity.desc": "Most popular",
    "popularity.asc": "Least popular",
    "vote_average.desc": "Best rated",
    "vote_average.asc": "Worst rated",
    "release_date.desc": "Newest",
    "release_date.asc": "Oldest",
}

DEFAULT_SORT = "popularity.desc"

POSTER_SIZE = "w500"
BACKDROP_SIZE = "w1280"

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={key}"
