"""A package manager that fails for an unrelated reason."""
import sys

sys.stderr.write("Could not reach https://rubygems.org/ (Errno::ECONNREFUSED)\n")
sys.exit(17)
