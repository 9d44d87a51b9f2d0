"""Word chain game: players take turns naming words in a category, each
starting with the last letter of the previous word."""
