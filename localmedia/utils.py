# localmedia/utils.py
import os
import random
import time

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp")
CHUNK_SIZE = 1024 * 1024

class UploadTooLarge(Exception):
    pass

def unique_image_name(original, now=None, rand=None):
    """<millis>-<0..1e9><ext>, keeping the original extension or defaulting to .png"""
    millis = int((now if now is not None else time.time()) * 1000)
    suffix = rand if rand is not None else random.randint(0, 10**9)
    ext = os.path.splitext(os.path.basename(original or ""))[1] or ".png"
    return f"{millis}-{suffix}{ext}"

def image_url(name): return "/images/" + name

def save_upload(src, dest, limit):
    """Copy a file object to dest in chunks; removes dest and raises if over limit."""
    written = 0
    try:
        with open(dest, "wb") as f:
            while True:
                chunk = src.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > limit:
                    raise UploadTooLarge(dest)
                f.write(chunk)
    except UploadTooLarge:
        os.remove(dest)
        raise
    return written

def list_images(directory):
    # OSError from listdir is left to the caller
    names = [fn for fn in os.listdir(directory) if fn.lower().endswith(IMAGE_EXTENSIONS)]
    return [{"name": fn, "url": image_url(fn)} for fn in sorted(names)]
