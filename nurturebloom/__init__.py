"""Django project package for the NurtureBloom backend."""
