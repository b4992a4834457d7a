"""
Pytest configuration and fixtures for resize-on-demand tests.
"""
import os
import sys

# Add the function directory to path so its sibling modules import as in Lambda
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)
sys.path.insert(0, os.path.join(project_root, 'functions', 'get-or-create-image'))
# Shared event and image builders (edge_events) live beside this file
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
