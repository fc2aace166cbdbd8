"""Services layer for the upload relay.

Services implement request handling logic on top of infrastructure clients:
- uploader: request validation, body assembly and the YouTube upload
"""
