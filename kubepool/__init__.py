"""
kubepool - operator CLI for OpenEBS storage on Kubernetes.

This package provides the cStor pool cluster (CSPC) generator and CLI tools to
list and describe Jiva volumes backed by a Kubernetes resource store.
"""

__version__ = "0.1.0"
__all__ = ["cli", "client", "generate", "volume"]
