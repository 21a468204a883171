"""ATS resume builder: profile tailoring and ATS compatibility scoring."""

__version__ = "0.1.0"
