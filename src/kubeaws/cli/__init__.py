"""kubeaws command-line interface."""
