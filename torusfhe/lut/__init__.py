"""Lookup tables, message encoders and table generators for programmable bootstrapping."""