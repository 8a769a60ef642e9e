"""Scaffold file contents for preview bundles."""

from __future__ import annotations

BASE_CSS = """@tailwind base;
@tailwind components;
@tailwind utilities;

html,
body {
  max-width: 100vw;
}

* {
  box-sizing: border-box;
  padding: 0;
  margin: 0;
}

a {
  color: inherit;
  text-decoration: none;
}
"""

BODY_CSS = """@layer base {
  * {
    @apply border-border;
  }
  body {
    @apply font-sans antialiased bg-background text-foreground;
  }
}
"""

LIGHT_CSS_VARS: dict[str, str] = {
    "--background": "0 0% 100%",
    "--foreground": "240 10% 3.9%",
    "--card": "0 0% 100%",
    "--card-foreground": "240 10% 3.9%",
    "--popover": "0 0% 100%",
    "--popover-foreground": "240 10% 3.9%",
    "--primary": "240 5.9% 10%",
    "--primary-foreground": "0 0% 98%",
    "--secondary": "240 4.8% 95.9%",
    "--secondary-foreground": "240 5.9% 10%",
    "--muted": "240 4.8% 95.9%",
    "--muted-foreground": "240 3.8% 46.1%",
    "--accent": "240 4.8% 95.9%",
    "--accent-foreground": "240 5.9% 10%",
    "--destructive": "0 84.2% 60.2%",
    "--destructive-foreground": "0 0% 100%",
    "--border": "240 5.9% 90%",
    "--input": "240 4.9% 83.9%",
    "--ring": "240 5% 64.9%",
    "--radius": "0.5rem",
}

DARK_CSS_VARS: dict[str, str] = {
    "--background": "240 10% 3.9%",
    "--foreground": "240 4.8% 95.9%",
    "--card": "240 10% 3.9%",
    "--card-foreground": "0 0% 98%",
    "--popover": "240 10% 3.9%",
    "--popover-foreground": "0 0% 98%",
    "--primary": "0 0% 98%",
    "--primary-foreground": "240 5.9% 10%",
    "--secondary": "240 3.7% 15.9%",
    "--secondary-foreground": "0 0% 98%",
    "--muted": "240 5.9% 10%",
    "--muted-foreground": "240 4.4% 58%",
    "--accent": "240 5.9% 10%",
    "--accent-foreground": "0 0% 98%",
    "--destructive": "0 84.2% 60.2%",
    "--destructive-foreground": "0 0% 100%",
    "--border": "240 3.7% 15.9%",
    "--input": "240 3.7% 15.9%",
    "--ring": "240 3.8% 46.1%",
}

UTILS_TS = """import { type ClassValue, clsx } from "clsx"
import { twMerge } from "tailwind-merge"

export function cn(...inputs: ClassValue[]) {
  return twMerge(clsx(inputs))
}
"""

TSCONFIG: dict[str, object] = {
    "compilerOptions": {
        "jsx": "react-jsx",
        "esModuleInterop": True,
        "baseUrl": ".",
        "paths": {"@/*": ["./*"]},
    }
}

ENTRY_PATH = "/App.tsx"
DEMO_PATH = "/demo.tsx"
STYLES_PATH = "/styles.css"
UTILS_PATH = "/lib/utils.ts"
TSCONFIG_PATH = "/tsconfig.json"


__all__ = [
    "BASE_CSS",
    "BODY_CSS",
    "DARK_CSS_VARS",
    "DEMO_PATH",
    "ENTRY_PATH",
    "LIGHT_CSS_VARS",
    "STYLES_PATH",
    "TSCONFIG",
    "TSCONFIG_PATH",
    "UTILS_PATH",
    "UTILS_TS",
]
