FAVORITES_KEY = "movie-favorites"
