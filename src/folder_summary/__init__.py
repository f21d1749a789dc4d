"""folder-summary: concatenate the files of a folder into one readable summary."""
