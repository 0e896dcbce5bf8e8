"""Compile AEP resource schemas into protobuf service definitions."""
