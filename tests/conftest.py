import os
import sys
from fnmatch import fnmatch
import importlib

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))


def pytest_addoption(parser):
    parser.addoption("--backend", help='backend', default='np', choices=['np'], action='store')


def pytest_configure(config):
    if config.option.backend == 'np':
        import orthomps.backend.backend_np as backend

    here = os.path.dirname(__file__)
    for folder in ["tensor", "mps"]:
        confs = [name[:-3] for name in os.listdir(os.path.join(here, folder, "configs")) if fnmatch(name, 'config*.py')]
        for conf in confs:
            conf = importlib.import_module(folder + ".configs." + conf)
            conf.backend = backend
