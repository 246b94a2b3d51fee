from typing import Optional
import logging
import mimetypes

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from channel_lib.services.resolver import resolve_service
from channel_lib.storage import AlreadyExistsError, InvalidPathError, RootNotFoundError
from .models import SongMetadata
from .service import UploadTooLargeError

router = APIRouter()
uploads_router = APIRouter()
logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@router.get('/songs')
async def api_songs(request: Request):
    song_svc = resolve_service(request, 'song_service')
    return [s.model_dump() for s in song_svc.list_songs()]


@router.post('/songs', status_code=201)
def api_songs_upload(
    request: Request,
    file: UploadFile = File(...),
    title: str = Form(...),
    artist: str = Form(''),
    album: str = Form(''),
    track: Optional[int] = Form(None),
):
    song_svc = resolve_service(request, 'song_service')
    try:
        metadata = SongMetadata(title=title, artist=artist, album=album, track=track)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.debug("Upload of %s for song %r", file.filename, title)
    try:
        song = song_svc.upload(file.file, file.filename or '', metadata)
    except UploadTooLargeError as e:
        raise HTTPException(status_code=413, detail={'error': 'too_large', 'message': str(e)})
    except AlreadyExistsError as e:
        raise HTTPException(status_code=409, detail={'error': 'conflict', 'message': str(e)})
    except RootNotFoundError as e:
        logger.error("Upload directory missing: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    except OSError as e:
        logger.exception('Failed to store upload %s', file.filename)
        raise HTTPException(status_code=500, detail=str(e))
    return song.model_dump()


@router.get('/songs/{song_id}')
async def api_song_get(request: Request, song_id: str):
    song_svc = resolve_service(request, 'song_service')
    try:
        return song_svc.get_song(song_id).model_dump()
    except KeyError:
        raise HTTPException(status_code=404, detail='Song not found')


@router.delete('/songs/{song_id}')
def api_song_delete(request: Request, song_id: str):
    song_svc = resolve_service(request, 'song_service')
    try:
        song_svc.delete_song(song_id)
    except KeyError:
        raise HTTPException(status_code=404, detail='Song not found')
    except OSError as e:
        logger.exception('Failed to delete song %s', song_id)
        raise HTTPException(status_code=500, detail=str(e))
    return {'ok': True, 'id': song_id}


def _iter_stream(stream):
    with stream:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk


@uploads_router.get('/uploads/{reference:path}')
def api_upload_get(request: Request, reference: str):
    """Stream a stored audio file for playback or download."""
    song_svc = resolve_service(request, 'song_service')
    try:
        stream = song_svc.open_file(reference)
    except InvalidPathError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError as e:
        logger.exception('Failed to open stored file %s', reference)
        raise HTTPException(status_code=500, detail=str(e))
    if stream is None:
        raise HTTPException(status_code=404, detail='File not found')
    media_type = mimetypes.guess_type(reference)[0] or 'application/octet-stream'
    return StreamingResponse(_iter_stream(stream), media_type=media_type)
