"""Configuration management for the reginae benchmark suite.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize benchmark widths, cache scope, evaluator profiles and
pre-placed queens.

File format (high-level)
------------------------
- experiment_settings: widths, output directory, ``persistent_cache`` and
  ``memo_key``.
- profiles: mapping profile name -> list of ``{"function": ..., "weight": ...}``
  entries, where ``function`` is a built-in heuristic name or a
  ``target:function`` binding.
- initial_queens: mapping width -> list of pre-placed queen indices.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist benchmark configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Return high-level benchmark settings (widths, output dir, cache scope)."""
        return self.config.get("experiment_settings", {})

    def get_profiles(self):
        """Return evaluator profiles as ``{name: [(function, weight), ...]}``."""
        raw = self.config.get("profiles", {})
        return {
            name: [(entry["function"], float(entry.get("weight", 0.0))) for entry in entries]
            for name, entries in raw.items()
        }

    def set_profile(self, name, entries):
        """Persist one evaluator profile given as ``[(function, weight), ...]``."""
        profiles = self.config.setdefault("profiles", {})
        profiles[name] = [{"function": fn, "weight": float(w)} for fn, w in entries]
        self.save_config()
        print(f"Profile {name} saved to {self.config_path}")

    def get_initial_queens(self):
        """Return pre-placed queens keyed by integer width."""
        raw = self.config.get("initial_queens", {})
        return {int(width): [int(q) for q in queens] for width, queens in raw.items()}

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
