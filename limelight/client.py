"""
client.py

LimelightClient supporting:
- LimelightClient()                                  (everything from LIMELIGHT_* env)
- LimelightClient(config=LimelightConfig(...))
- LimelightClient(organization=..., access_key=..., secret=...)

Limelight authentication (as implemented here):
- every call is signed; access_key, expires and signature travel in the query
- the host a request is signed for is also the host it is sent to
- main API:      http://api.videoplatform.limelight.com
- analytics API: http://api.delvenetworks.com
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import requests

from .config import LimelightConfig
from .signing import RequestSigner, SignedRequest
from .uploads import FilePath, to_upload_source

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Unnamed"
PUBLISHED_STATE = "Published"


def _names(names: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(names, str):
        return [names]
    return [str(n) for n in names]


class LimelightClient:
    def __init__(
        self,
        config: Optional[LimelightConfig] = None,
        *,
        organization: Optional[str] = None,
        access_key: Optional[str] = None,
        secret: Optional[str] = None,
        session: Optional[requests.Session] = None,
        analytics_session: Optional[requests.Session] = None,
    ):
        if config is None:
            config = LimelightConfig.from_values(
                organization=organization,
                access_key=access_key,
                secret=secret,
            )

        self.config = config
        self.session = session or requests.Session()
        self.analytics_session = analytics_session or requests.Session()

        self.base_url = f"/rest/organizations/{config.organization}"
        self.base_media_url = f"{self.base_url}/media"
        self.base_channels_url = f"{self.base_url}/channels"
        self.base_analytics_url = f"{self.base_url}/analytics"

        self.signer = RequestSigner(
            config.credentials,
            default_host=config.host,
            default_path=self.base_media_url,
        )

    def __enter__(self) -> "LimelightClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()
        self.analytics_session.close()

    def _session_for(self, host: str) -> requests.Session:
        if host == self.config.analytics_host:
            return self.analytics_session
        return self.session

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        host: Optional[str] = None,
        data: Optional[Any] = None,
        files: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        host = host or self.config.host
        signed: SignedRequest = self.signer.sign(method, path, params, host)

        # non-2xx responses are handed back as-is
        return self._session_for(host).request(
            method=signed.method.upper(),
            url=signed.url,
            data=data,
            files=files,
            timeout=timeout or self.config.timeout_seconds,
        )

    def request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        return self.request(method, path, **kwargs).json()

    # -------------------------
    # Media
    # -------------------------
    def media_info(self, media_id: str) -> Any:
        return self.request_json("get", f"{self.base_media_url}/{media_id}/properties.json")

    def media_encodings(self, media_id: str, primary_use: str = "all") -> Any:
        # primary_use: all, flash, mobile264, mobile3gp, httplivestreaming
        return self.request_json(
            "get",
            f"{self.base_media_url}/{media_id}/encodings.json",
            params={"primary_use": primary_use},
        )

    def update_media(self, media_id: str, attributes: Mapping[str, Any]) -> Any:
        return self.request_json("put", f"{self.base_media_url}/{media_id}/properties", data=dict(attributes))

    def delete_media(self, media_id: str) -> requests.Response:
        return self.request("delete", f"{self.base_media_url}/{media_id}")

    def upload_path(self) -> str:
        return self.signer.signed_path("post", self.base_media_url, host=self.config.host)

    def upload_url(self) -> str:
        """Fully qualified, pre-signed upload URL for an external uploader."""
        return self.signer.sign("post", self.base_media_url, host=self.config.host).url

    def upload(self, source: Any, attributes: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Upload a media file.

        ``source`` is a path, a file-like object or an explicit
        FilePath/ByteStream. File-like objects need ``attributes["filename"]``.
        Recognized attributes: title, filename, type, metadata.
        """
        attributes = dict(attributes or {})
        upload_source = to_upload_source(source, attributes)

        metadata = dict(attributes.get("metadata") or {})

        data: Dict[str, Any] = {"title": attributes.get("title", DEFAULT_TITLE)}
        for key, value in metadata.items():
            data[f"custom_property[{key}]"] = value

        # the file is opened before anything is registered remotely
        if isinstance(upload_source, FilePath):
            with open(upload_source.path, "rb") as fh:
                self._register_metadata(metadata)
                files = {"media_file": (upload_source.filename, fh, upload_source.mime)}
                return self._post_upload(upload_source.filename, data, files)

        self._register_metadata(metadata)
        files = {"media_file": (upload_source.filename, upload_source.handle, upload_source.content_type)}
        return self._post_upload(upload_source.filename, data, files)

    def _register_metadata(self, metadata: Mapping[str, Any]) -> None:
        if not metadata:
            return
        registered = set(self.list_metadata())
        missing = [str(k) for k in metadata if str(k) not in registered]
        if missing:
            logger.info("Registering custom properties before upload: %s", missing)
            self.create_metadata(missing)

    def _post_upload(self, filename: str, data: Dict[str, Any], files: Dict[str, Any]) -> Any:
        logger.info("Uploading %s to organization %s", filename, self.config.organization)
        return self.request_json(
            "post",
            self.base_media_url,
            data=data,
            files=files,
            timeout=self.config.upload_timeout_seconds,
        )

    # -------------------------
    # Channels
    # -------------------------
    def create_channel(self, name: str) -> Any:
        return self.request_json("post", self.base_channels_url, data={"title": name})

    def update_channel(self, channel_id: str, properties: Mapping[str, Any]) -> Any:
        return self.request_json("put", f"{self.base_channels_url}/{channel_id}/properties", data=dict(properties))

    def publish_channel(self, channel_id: str) -> Any:
        return self.update_channel(channel_id, {"state": PUBLISHED_STATE})

    def delete_channel(self, channel_id: str) -> requests.Response:
        return self.request("delete", f"{self.base_channels_url}/{channel_id}")

    def list_channel_media(self, channel_id: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request_json("get", f"{self.base_channels_url}/{channel_id}/media.json", params=options)

    def add_media_to_channel(self, media_id: str, channel_id: str) -> Any:
        return self.request_json("put", f"{self.base_channels_url}/{channel_id}/media/{media_id}")

    def delete_media_from_channel(self, media_id: str, channel_id: str) -> requests.Response:
        return self.request("delete", f"{self.base_channels_url}/{channel_id}/media/{media_id}")

    # -------------------------
    # Custom metadata
    # -------------------------
    def list_metadata(self) -> List[str]:
        body = self.request_json("get", f"{self.base_media_url}/properties/custom.json")
        return [meta["type_name"] for meta in body["custom_property_types"]]

    def create_metadata(self, names: Union[str, Iterable[str]]) -> List[requests.Response]:
        return [
            self.request("put", f"{self.base_media_url}/properties/custom/{name}")
            for name in _names(names)
        ]

    def remove_metadata(self, names: Union[str, Iterable[str]]) -> List[requests.Response]:
        return [
            self.request("delete", f"{self.base_media_url}/properties/custom/{name}")
            for name in _names(names)
        ]

    # -------------------------
    # Analytics
    # -------------------------
    def analytics_for_media(self, *media_ids: str) -> Any:
        return self.request_json(
            "get",
            f"{self.base_analytics_url}/report/media.json",
            params={"media_id": ",".join(str(m) for m in media_ids)},
            host=self.config.analytics_host,
        )

    def _report(self, path: str, start_time: Any, end_time: Any, options: Optional[Mapping[str, Any]]) -> Any:
        params: Dict[str, Any] = {"start": start_time, "end": end_time}
        params.update(options or {})
        return self.request_json("get", path, params=params, host=self.config.host)

    def analytics_for_channels(self, start_time: Any, end_time: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        return self._report(f"{self.base_analytics_url}/performance/channels.json", start_time, end_time, options)

    def media_engagement(self, start_time: Any, end_time: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        return self._report(f"{self.base_analytics_url}/engagement/media.json", start_time, end_time, options)

    def most_played_media(self, start_time: Any, end_time: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        return self._report(f"{self.base_analytics_url}/performance/media.json", start_time, end_time, options)
