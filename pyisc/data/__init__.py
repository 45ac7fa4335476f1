# This file marks this directory as a Python package
