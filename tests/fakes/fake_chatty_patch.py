"""A patch tool that writes a lot of output before consuming its input.

Fills the stdout pipe first, then copies stdin byte for byte over the target file.
"""
import sys

sys.stdout.write("patching file %s\n" % sys.argv[-1])
sys.stdout.write("x" * (1024 * 1024))
sys.stdout.flush()
data = sys.stdin.buffer.read()
with open(sys.argv[-1], "wb") as f:
    f.write(data)
