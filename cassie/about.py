__title__ = "cassie"
__version__ = "0.1.0"
__summary__ = "Cassie - build and evaluate symbolic term trees"
__author__ = "Cassie Contributors"
__license__ = "MIT"
