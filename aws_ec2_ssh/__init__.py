"""SSH into EC2 instances through SSM Session Manager and EC2 Instance Connect."""

__version__ = "0.1.0"
