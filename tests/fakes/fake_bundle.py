"""Stands in for `bundle update`: records the gems in Gemfile.lock."""
import sys

with open("Gemfile.lock", "a", encoding="utf-8") as f:
    f.write("updated %s\n" % " ".join(sys.argv[1:]))
print("Bundle updated!")
