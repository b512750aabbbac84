"""YelpCamp API: campground listings and comments."""

__version__ = "1.0.0"
