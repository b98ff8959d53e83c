"""
__main__.py

This file adds support for running wallshow as a python module instead of invoking the "wallshow"
command line entrypoint. The slideshow timer uses this form ("python -m wallshow next") so that
it runs with the same interpreter that started the slideshow.
"""


from wallshow.cli import main


if __name__ == "__main__":
    main()
