"""Codecs de formatos de arquivo consumidos e produzidos pela API."""
