"""Portfolio site: project listing, case-study pages and static page stamping."""
