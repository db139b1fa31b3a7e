import os
import sys

# Make the flat modules importable without installing the project
SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'huffman_compressor'))
if SRC_DIR not in sys.path:
	sys.path.insert(0, SRC_DIR)
