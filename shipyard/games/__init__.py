"""Supported games: ROM slots, cached assets, release asset selection and launch commands."""