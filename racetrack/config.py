import json
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

REPO_ROOT = Path(__file__).resolve().parents[1]
CONFIG_FILE_PATH = os.getenv('RACETRACK_CONFIG', str(REPO_ROOT / 'configs' / 'racetrack.json'))

def load_config(path=CONFIG_FILE_PATH):
    """
    Loads the racetrack config file.
    """
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        return config
    except FileNotFoundError:
        print(f"Warning: Could not find config file at {path}, using defaults")
        return None
    except Exception as e:
        print(f"Warning: Could not parse config file {path}: {e}")
        return None

# Load the config ONCE when the module is first imported
RACETRACK_CONFIG = load_config()

def get_config(key_path, default=None):
    """
    Safely gets a value from the loaded config using a 'dot.path'.
    Example: get_config('race.max_cars')
    """
    if not RACETRACK_CONFIG:
        return default

    try:
        keys = key_path.split('.')
        value = RACETRACK_CONFIG
        for key in keys:
            value = value[key]
        return value
    except (KeyError, TypeError):
        print(f"Warning: Could not find config key: {key_path}")
        return default

def env_flag(name, default=False):
    env_value = os.getenv(name)
    if env_value is None:
        return default
    return env_value.lower() in ("1", "true", "yes", "on")

def env_int(name, default=None):
    env_value = os.getenv(name)
    if env_value is None or env_value == "":
        return default
    try:
        return int(env_value)
    except ValueError:
        print(f"Warning: {name}={env_value!r} is not an integer, ignoring")
        return default

def data_path(kind, name):
    """
    Resolves a track, move or waypoint file. Existing paths are used as
    given, relative ones are also tried against the repo root and the
    configured data directory, e.g. data_path('tracks', 'oval.txt').
    """
    path = Path(name)
    if path.exists() or path.is_absolute():
        return path
    directory = get_config(f'directories.{kind}', kind)
    for candidate in (REPO_ROOT / path, REPO_ROOT / directory / path):
        if candidate.exists():
            return candidate
    return path
