# Development server for Channel: song records are kept in memory only
from channel_lib.main import create_app, Config
app = create_app(Config(songs_file=':memory:'))
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
