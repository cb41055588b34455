"""Centralized imports for the API layer."""

# Standard library
from collections import Counter
from typing import List, Optional, Union

# External
from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
