"""Configure test suite environment"""
import os
import sys

# Logger configuration is read when dalbit.utils.logging is first imported
os.environ.setdefault('LOG_LEVEL', 'WARNING')
os.environ.setdefault('DALBIT_STAGE', 'test')
os.environ.setdefault('POWERTOOLS_SERVICE_NAME', 'dalbit-tests')

project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)
