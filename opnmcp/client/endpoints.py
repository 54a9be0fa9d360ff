"""
Static OPNsense API endpoint tables.

Each module maps its method names to an HTTP verb and path below /api.
Path placeholders ({uuid}, {name}, {identifier}) are filled from call
parameters; remaining parameters become the JSON body (POST) or query (GET).

Module names must not contain underscores: tool identifiers are split on
'_' to recover the owning module.
"""

from typing import Literal, NamedTuple


class Endpoint(NamedTuple):
    verb: Literal["GET", "POST"]
    path: str


def _get(path: str) -> Endpoint:
    return Endpoint("GET", path)


def _post(path: str) -> Endpoint:
    return Endpoint("POST", path)


CORE_ENDPOINTS: dict[str, dict[str, Endpoint]] = {
    "system": {
        "get_status": _get("core/system/status"),
        "get_info": _get("diagnostics/system/systemInformation"),
        "dismiss_status": _post("core/system/dismissStatus"),
        "reboot": _post("core/system/reboot"),
        "halt": _post("core/system/halt"),
    },
    "firmware": {
        "get_info": _get("core/firmware/info"),
        "get_status": _get("core/firmware/status"),
        "check": _post("core/firmware/check"),
        "get_changelog": _post("core/firmware/changelog/{version}"),
        "update": _post("core/firmware/update"),
        "audit": _post("core/firmware/audit"),
    },
    "firewall": {
        "search_rule": _post("firewall/filter/searchRule"),
        "get_rule": _get("firewall/filter/getRule/{uuid}"),
        "add_rule": _post("firewall/filter/addRule"),
        "set_rule": _post("firewall/filter/setRule/{uuid}"),
        "delete_rule": _post("firewall/filter/delRule/{uuid}"),
        "toggle_rule": _post("firewall/filter/toggleRule/{uuid}"),
        "apply": _post("firewall/filter/apply"),
        "savepoint": _post("firewall/filter/savepoint"),
        "search_alias": _post("firewall/alias/searchItem"),
        "get_alias": _get("firewall/alias/getItem/{uuid}"),
        "add_alias": _post("firewall/alias/addItem"),
        "delete_alias": _post("firewall/alias/delItem/{uuid}"),
        "toggle_alias": _post("firewall/alias/toggleItem/{uuid}"),
    },
    "interfaces": {
        "get_overview": _get("interfaces/overview/interfacesInfo"),
        "get_details": _get("interfaces/overview/getInterface/{identifier}"),
        "reload_interface": _post("interfaces/overview/reloadInterface/{identifier}"),
        "search_vlan": _post("interfaces/vlan_settings/searchItem"),
        "add_vlan": _post("interfaces/vlan_settings/addItem"),
        "delete_vlan": _post("interfaces/vlan_settings/delItem/{uuid}"),
    },
    "diagnostics": {
        "get_health": _get("diagnostics/system/systemResources"),
        "get_arp": _get("diagnostics/interface/getArp"),
        "search_arp": _post("diagnostics/interface/searchArp"),
        "query_states": _post("diagnostics/firewall/queryStates"),
        "get_routes": _get("diagnostics/interface/getRoutes"),
        "ping": _post("diagnostics/ping/start/{identifier}"),
        "traceroute": _post("diagnostics/traceroute/set"),
    },
    "services": {
        "search": _post("core/service/search"),
        "start": _post("core/service/start/{name}"),
        "stop": _post("core/service/stop/{name}"),
        "restart": _post("core/service/restart/{name}"),
    },
    "dhcp": {
        "search_lease": _post("dhcpv4/leases/searchLease"),
        "get": _get("dhcpv4/service/status"),
        "restart": _post("dhcpv4/service/restart"),
    },
    "backup": {
        "list_backups": _get("core/backup/backups/this"),
        "download": _get("core/backup/download/this"),
    },
    "openvpn": {
        "search_instance": _post("openvpn/instances/search"),
        "get_instance": _get("openvpn/instances/get/{uuid}"),
        "toggle_instance": _post("openvpn/instances/toggle/{uuid}"),
        "search_session": _post("openvpn/service/searchSessions"),
    },
    "ipsec": {
        "get_status": _get("ipsec/service/status"),
        "search_connection": _post("ipsec/connections/searchConnection"),
        "toggle_connection": _post("ipsec/connections/toggleConnection/{uuid}"),
        "search_session": _post("ipsec/sessions/searchPhase1"),
    },
    "users": {
        "search": _post("auth/user/search"),
        "get_user": _get("auth/user/get/{uuid}"),
        "add_user": _post("auth/user/add"),
        "delete_user": _post("auth/user/del/{uuid}"),
    },
}


PLUGIN_ENDPOINTS: dict[str, dict[str, Endpoint]] = {
    "wireguard": {
        "get_status": _get("wireguard/service/show"),
        "get": _get("wireguard/general/get"),
        "search_client": _post("wireguard/client/searchClient"),
        "add_client": _post("wireguard/client/addClient"),
        "delete_client": _post("wireguard/client/delClient/{uuid}"),
        "toggle_client": _post("wireguard/client/toggleClient/{uuid}"),
        "gen_key_pair": _get("wireguard/server/keyPair"),
        "reconfigure": _post("wireguard/service/reconfigure"),
    },
    "nginx": {
        "get_status": _get("nginx/service/status"),
        "get": _get("nginx/settings/get"),
        "search_upstream": _post("nginx/settings/searchUpstream"),
        "add_upstream": _post("nginx/settings/addUpstream"),
        "search_http_server": _post("nginx/settings/searchHttpServer"),
        "add_http_server": _post("nginx/settings/addHttpServer"),
        "reconfigure": _post("nginx/service/reconfigure"),
    },
    "haproxy": {
        "get_status": _get("haproxy/service/status"),
        "get": _get("haproxy/settings/get"),
        "search_frontend": _post("haproxy/settings/searchFrontends"),
        "add_frontend": _post("haproxy/settings/addFrontend"),
        "search_backend": _post("haproxy/settings/searchBackends"),
        "add_backend": _post("haproxy/settings/addBackend"),
        "add_server": _post("haproxy/settings/addServer"),
        "reconfigure": _post("haproxy/service/reconfigure"),
    },
    "bind": {
        "get_status": _get("bind/service/status"),
        "get": _get("bind/general/get"),
        "search_primary_domain": _post("bind/domain/searchPrimaryDomain"),
        "search_record": _post("bind/record/searchRecord"),
        "reconfigure": _post("bind/service/reconfigure"),
    },
    "caddy": {
        "get_status": _get("caddy/service/status"),
        "get": _get("caddy/general/get"),
        "search_reverse_proxy": _post("caddy/reverse_proxy/searchReverseProxy"),
        "reconfigure": _post("caddy/service/reconfigure"),
    },
    "crowdsec": {
        "get_status": _get("crowdsec/service/status"),
        "get": _get("crowdsec/general/get"),
        "get_decisions": _get("crowdsec/decisions/get"),
        "get_alerts": _get("crowdsec/alerts/get"),
    },
}
