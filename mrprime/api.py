# mrprime/api.py
import time
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .audit import configure_logging, log_event
from .config import load_settings
from .entropy import default_rng
from .errors import EntropyUnavailable, InvalidArgument
from .primes import generate_prime, generate_safe_prime, miller_rabin
from .witnesses import deterministic_witnesses

# ========= Config =========
SETTINGS = load_settings()
MAX_GENERATE_BITS = 4096
MAX_SAFE_BITS = 512
MAX_ROUNDS = 256

# ========= Models =========
class PrimalityRequest(BaseModel):
    n: str = Field(..., pattern=r"^-?[0-9]+$", max_length=4300, description="decimal integer; string so JSON clients keep precision")
    rounds: Optional[int] = Field(None, ge=1, le=MAX_ROUNDS, description="random witnesses above the deterministic range")

class PrimalityResponse(BaseModel):
    n: str
    probablePrime: bool
    mode: Literal["deterministic", "random"]
    rounds: Optional[int] = None

class GenerateRequest(BaseModel):
    bits: int = Field(1024, ge=2, le=MAX_GENERATE_BITS)
    rounds: Optional[int] = Field(None, ge=1, le=MAX_ROUNDS)
    safe: bool = False

class GenerateResponse(BaseModel):
    prime: str
    bitLength: int
    rounds: int
    safe: bool
    elapsedMs: float

# ========= Helpers =========
def ensure_entropy():
    try:
        default_rng().random_bits(128)
    except EntropyUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Secure random source unavailable: {e}")

def run(fn, *args):
    try:
        return fn(*args)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EntropyUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Secure random source unavailable: {e}")

# ========= App =========
app = FastAPI(title="Primality Service", version="1.0")

@app.on_event("startup")
def _startup():
    configure_logging(SETTINGS.log_level)
    ensure_entropy()

@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "Miller-Rabin primality service. See /docs",
        "docs": "/docs"
    }

# ---- /v1/primality/test ----
@app.post("/v1/primality/test", response_model=PrimalityResponse)
def primality_test(req: PrimalityRequest):
    n = int(req.n)
    k = req.rounds or SETTINGS.default_rounds
    verdict = run(miller_rabin, n, k)
    deterministic = deterministic_witnesses(n) is not None
    log_event("test", f"bits={n.bit_length()}", f"verdict={verdict}")
    return PrimalityResponse(
        n=str(n),
        probablePrime=verdict,
        mode="deterministic" if deterministic else "random",
        rounds=None if deterministic else k,
    )

# ---- /v1/primes/generate ----
@app.post("/v1/primes/generate", response_model=GenerateResponse)
def primes_generate(req: GenerateRequest):
    if req.safe and req.bits > MAX_SAFE_BITS:
        raise HTTPException(400, f"safe primes are limited to {MAX_SAFE_BITS} bits")
    k = req.rounds or SETTINGS.keygen_rounds
    t0 = time.perf_counter()
    p = run(generate_safe_prime if req.safe else generate_prime, req.bits, k)
    elapsed = (time.perf_counter() - t0) * 1000
    log_event("generate", f"bits={req.bits}", f"safe={req.safe} rounds={k}")
    return GenerateResponse(
        prime=str(p),
        bitLength=p.bit_length(),
        rounds=k,
        safe=req.safe,
        elapsedMs=round(elapsed, 3),
    )
