""" Windows registry processing workflows for forensicstores """

__version__ = "0.1.0"
