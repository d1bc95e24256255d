"""Artifact Detector — finds a phone-artifact hotspot by its SSID.

Scans the host's wireless radio on a fixed cadence, looks for a network
named ``<prefix>XX`` and publishes the name it finds (or an empty string)
once per cycle.

Quickstart::

    python -m artifact_detector --prefix PhoneArtifact --debug
"""

__version__ = "0.1.0"
